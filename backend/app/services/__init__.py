"""
RideRelay Backend: Services Layer
===================================

Service Inventory:
    - AuthService:           token issue/verify, cookie handling, guards
    - DocumentService:       collection CRUD shared by both resources
    - ServiceCatalogService: services collection + price sorting
    - BookingService:        bookings collection + owner-scoped listing
"""
