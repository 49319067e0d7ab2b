"""
Service layer.

``ship_rules`` and ``ship_query`` hold the validation, rating,
filtering and pagination rules as plain functions; ``ship_service``
applies them against the database.
"""
