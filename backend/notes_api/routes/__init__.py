# Routes package init
"""
Notes Functions Backend - API Routes Package
==============================================

What:  HTTP handlers that accept requests and return responses.

Route Inventory:
    - greeting.py:  /helloWorld      (liveness, no auth)
    - notes.py:     /getUserNotes    (list the caller's notes)
                    /summarizeNote   (one-sentence summary of one note)

Every endpoint accepts GET, POST, PUT, PATCH and DELETE.

Design Principle:
    Routes handle HTTP concerns only: read query/body/headers, call the
    auth helper and NoteService, and shape the response. Rules about ids,
    note text and summarization paths live in the services layer.
"""

# Methods accepted by every endpoint
ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]
