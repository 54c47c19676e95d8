"""
ProFast Backend - API Routes
=============================

Route Inventory:
    - health.py:   GET  /                        (plain-text status)
                   GET  /health                  (dependency status)
    - users.py:    POST /users
    - parcels.py:  POST/GET /parcels, GET/DELETE /parcels/{id}
    - tracking.py: POST /parcel-tracking, GET /parcel-tracking/{tracking_id}
    - payments.py: GET /payments, POST /payments/confirm, POST /create-payment

Routes stay thin: extract input, call a service, return its result.
Errors propagate as ProFastError subclasses to the handlers in main.py.
"""
