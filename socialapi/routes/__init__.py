# Routes package init
"""
SocialAPI Backend: API Routes Package
=====================================

Route Inventory (resource routes are mounted under settings.api_prefix):
    - users.py:     GET/POST        /users
                    GET/PUT/DELETE  /users/{userId}
                    POST/DELETE     /users/{userId}/friends/{friendId}
    - thoughts.py:  GET/POST        /thoughts
                    GET/PUT/DELETE  /thoughts/{thoughtId}
                    POST            /thoughts/{thoughtId}/reactions
                    DELETE          /thoughts/{thoughtId}/reactions/{reactionId}
    - health.py:    GET             /health

Routes only extract request data, call a service, and return its schema.
"""
