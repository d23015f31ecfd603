# Services package init
"""
Bloggy Backend — Services Layer
=================================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).
How:   Services are stateless singletons; each call receives the request's
       AsyncSession from the route.

Service Inventory:
    - validation: Pure required-field and identifier checks
    - CategoryService: List and create categories
    - PostService: List, fetch and create posts; update/delete declared only
    - FileService: Upload validation, storage, and cleanup for post images
"""
