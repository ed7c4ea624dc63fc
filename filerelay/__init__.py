"""
FileRelay: Application Package Initializer
============================================

A small HTTP relay: POST an image or PDF to /read-file and receive a text
description generated by Google Gemini.

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Relay Logic)      │  ← Validation, Gemini call
    ├─────────────────────────────────────┤
    │            Schemas (Data)           │  ← Pydantic request/response models
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
