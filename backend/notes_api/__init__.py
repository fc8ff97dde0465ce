"""
Notes Functions Backend - Application Package Initializer
=========================================================

What: Marks the `notes_api` directory as a Python package.
Who:  Used by uvicorn (`notes_api.main:app`), pytest and `python -m notes_api`.

Architecture Note:
    The service is a thin integration layer in front of three managed services:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← parameter extraction, response shaping
    ├─────────────────────────────────────┤
    │     Services (Note orchestration)   │  ← id/text rules, mock vs live summary
    ├─────────────────────────────────────┤
    │   Capability interfaces (base.py)   │  ← verify token, read notes, summarize
    ├─────────────────────────────────────┤
    │  Firebase Auth · Firestore · OpenAI │  ← external collaborators
    └─────────────────────────────────────┘

    Routes depend on the interfaces only; the concrete Firebase and OpenAI
    adapters are wired in `dependencies.py` and replaced by fakes in tests.
"""

__version__ = "1.0.0"
