# Routes package init
"""
FileRelay: API Routes Package
===============================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - read_file.py:  POST /read-file   (describe an uploaded file)
    - health.py:     GET  /health      (liveness probe)

Routes stay thin: they extract the upload, call the services and let the
global exception handlers format errors.
"""
