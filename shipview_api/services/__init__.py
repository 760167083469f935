"""
ShipView API — Services Layer
===============================

Service Inventory:
    - query_builder: Filter fields → ordered predicates → bound WHERE clause
    - OrderService:  Order page + count, and distinct filter options
"""
