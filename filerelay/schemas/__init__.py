"""
FileRelay: API Schemas
========================

What:  Pydantic models shared by the services and the HTTP layer.

Schema Inventory:
    - Upload:           validated file bytes + declared metadata
    - GenerationResult: model output, serialized as {"generatedText": ...}
    - ErrorResponse:    {"error": ..., "details": ...}
    - HealthResponse:   GET /health payload
"""
