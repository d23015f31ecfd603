# Routes package init
"""
Bloggy Backend — API Routes Package
=====================================

Route Inventory:
    - posts.py:       GET/POST /api/posts, GET/PUT/DELETE /api/posts/{id}
    - categories.py:  GET/POST /api/category
    - files.py:       GET /api/files/{path}   (uploaded post images)
    - health.py:      GET /health
    - request_body.py: JSON-or-form field reading for the create routes

Routes stay thin: they pull data out of the request, call a service, and
wrap the result in the success envelope. Errors are formatted centrally.
"""
