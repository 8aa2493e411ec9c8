"""
auth — User authentication module.

Provides:
  • Password hashing (bcrypt, configurable work factor)
  • Signed, expiring bearer tokens (HMAC-SHA256)
  • ``UserStore`` port with an in-memory implementation
  • ``AuthService`` — register / login / authenticate
  • Register / Login API routes and the ``get_current_user`` dependency
"""
