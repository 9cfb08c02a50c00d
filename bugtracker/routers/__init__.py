"""
FastAPI routers grouped by concern (bug API, pages).

Each module exposes an APIRouter included by the app factory in app.py.
"""
