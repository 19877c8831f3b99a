"""
Blog Backend — Services Layer
==============================

What:  Business rules between the HTTP routes and the persistence store.

Service Inventory:
    - PasswordHasher:  bcrypt digests for stored credentials
    - TokenService:    signs and verifies bearer tokens
    - access_policy:   the single ownership rule for posts and comments
    - AuthService:     registration, login, current user
    - PostService:     post listing, detail, create / update / delete
    - CommentService:  comment listing, create / update / delete

Services never commit; the per-request session dependency owns the
transaction boundary.
"""
