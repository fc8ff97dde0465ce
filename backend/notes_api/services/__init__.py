# Services package init
"""
Notes Functions Backend - Services Layer
==========================================

What:  Business logic and adapters sitting between routes (HTTP) and the
       managed services (Firebase Auth, Firestore, OpenAI).
How:   Routes receive services through FastAPI's dependency injection.

Service Inventory:
    - base.py: Capability interfaces (IdentityVerifier, NoteStore, SummarizerBackend)
    - firebase_service.py: Firebase Auth verifier and Firestore note store
    - openai_service.py: Chat-completions summarizer over httpx
    - mock_summarizer.py: Deterministic, network-free summarizer
    - note_service.py: Orchestrates fetch → validate text → summarize
"""
