# Routes package init
"""
Exercise API Backend: API Routes Package
=========================================

Route Inventory:
    - exercises.py: POST   /exercises        (create)
                    GET    /exercises        (list)
                    GET    /exercises/{id}   (read one)
                    PUT    /exercises/{id}   (replace)
                    DELETE /exercises/{id}   (delete)
    - health.py:    GET    /health           (service health check)

Routes stay thin: extract the request data, call the service, return the
model. Business rules live in services/exercise_service.py.
"""
