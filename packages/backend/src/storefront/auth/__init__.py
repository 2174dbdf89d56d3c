"""Session authentication and role gating.

Login issues a signed JWT stored in an HTTP-only cookie; the same token
is accepted as an Authorization: Bearer header for API clients. Every
request resolves the token back to a User row, whose rol (ADMIN/USER)
gates the admin-only views.
"""
