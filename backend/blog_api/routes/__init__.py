"""
Blog Backend — Route Package
=============================

One APIRouter per resource, mounted by `create_app()`:
    health    GET /health
    auth      /api/auth/register, /api/auth/login, /api/auth/me
    posts     /api/posts, /api/posts/{id}
    comments  /api/comments, /api/comments/post/{postId}, /api/comments/{id}
"""
