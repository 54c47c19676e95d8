"""
ProFast Backend - Parcel Delivery API
======================================

Layered FastAPI service over MongoDB:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← one or two collection calls each
    ├─────────────────────────────────────┤
    │   Schemas (request/response, ids)   │  ← pydantic + ObjectId helpers
    ├─────────────────────────────────────┤
    │   Database (async MongoDB client)   │  ← users, parcels, tracking, payments
    └─────────────────────────────────────┘

The payment gateway (Stripe) sits beside the services behind the
PaymentGateway interface.
"""

__version__ = "1.0.0"
