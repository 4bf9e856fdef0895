# Services package init
"""
SocialAPI Backend: Services Layer
=================================

What:  Business logic between routes (HTTP) and MongoDB (persistence).

Service Inventory:
    - UserService:    user CRUD, friend links, rename propagation, delete cascade
    - ThoughtService: thought CRUD, author linking, id scrub, reactions

Services take the database handle as an argument on every call and keep no
state of their own, so tests drive them with a mock database.
"""
