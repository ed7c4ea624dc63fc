# Services package init
"""
FileRelay: Services Layer
===========================

What:  Logic sitting between the routes (HTTP) and the Gemini API.

Service Inventory:
    - GenerativeService (abstract): "prompt + file → text" collaborator
    - GeminiService: Concrete implementation using Google Gemini
    - UploadService: MIME type and size validation, inline-data encoding
    - RelayService: Orchestrates validate → generate → GenerationResult
"""
