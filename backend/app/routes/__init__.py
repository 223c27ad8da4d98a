"""
RideRelay Backend: API Routes Package
=======================================

Route Inventory (resource routes mounted under settings.api_prefix):
    - auth.py:      POST /auth/access-token, POST /auth/logout
    - services.py:  GET /services, GET /services/{id}, POST /add-new-service,
                    PUT /update-service/{id}, DELETE /delete-service/{id}
    - bookings.py:  GET /bookings, GET /bookings/{id}, POST /book-a-service,
                    PUT /update-booking/{id}, DELETE /delete-booking/{id}
    - health.py:    GET /, GET /health  (never prefixed)

Routes stay thin: extract params, call a service, return its result.
"""
