"""
ShipView API — Routes Package
===============================

Route Inventory:
    - orders.py:  GET /api/orders   (filtered, paginated orders)
                  GET /api/filters  (distinct dropdown values)
    - health.py:  GET /health       (database connectivity check)

Routes stay thin: they collect query parameters into schema models, call
OrderService and let the global exception handlers format failures.
"""
