"""
Backend package for the spa admin API.

Holds the framework-neutral handlers and the adapters for Firebase
(Auth + Firestore) and Cloudinary. The handlers are served both as
Firebase HTTPS functions (see main.py) and as a FastAPI app for
self-hosted runs.
"""
