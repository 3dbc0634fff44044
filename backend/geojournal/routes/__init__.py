# Routes package init
"""
GeoJournal Backend — API Routes Package
========================================

Route Inventory:
    - users.py:    GET  /api/users, POST /api/users/signup, POST /api/users/login
    - entries.py:  GET/PATCH/DELETE /api/journal/{entry_id},
                   GET /api/journal/user/{user_id}, POST /api/journal
    - health.py:   GET  /health

Routes stay thin: they take validated input, call one service method and
wrap the result. Errors are raised, never returned.
"""
