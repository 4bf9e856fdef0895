"""
SocialAPI Backend: Application Package
======================================

What: REST API for users, thoughts, reactions and friendships on MongoDB.
Who:  Imported by uvicorn (socialapi.main:app), pytest, and the service layer.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │  Services (referential integrity)   │  ← cascades, scrubs, linking
    ├─────────────────────────────────────┤
    │  Models (documents) & Schemas (API) │  ← document factories + Pydantic
    ├─────────────────────────────────────┤
    │    Database (Motor client)          │  ← one client per process
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
