"""
ProFast Backend - Services Layer
=================================

Business logic between routes (HTTP) and MongoDB.

Service Inventory:
    - UserService:     first-login registration
    - ParcelService:   parcel create/list/get/delete
    - TrackingService: append-only tracking events
    - PaymentService:  history, confirmation, payment intents
    - PaymentGateway (abstract) / StripeGateway: outbound card payments

Services receive the database handle per call and hold no request state,
so each is a module-level singleton.
"""
