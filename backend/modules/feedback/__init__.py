# backend/modules/feedback/__init__.py

"""
Customer Reviews Module

Customers review delivered orders; every accepted review recomputes the
restaurant's aggregate rating and review count from the stored reviews.
"""
