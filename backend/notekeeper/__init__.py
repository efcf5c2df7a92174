"""
NoteKeeper — Package Initializer
==================================

Architecture Note:
    ┌─────────────────────────────────────┐
    │     Server (uvicorn lifecycle)      │  ← listen, signals, graceful drain
    ├─────────────────────────────────────┤
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← id/timestamp assignment, 404s
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← Note record + Pydantic wire types
    ├─────────────────────────────────────┤
    │        Store (In-Memory)            │  ← lock-guarded dict of notes
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
