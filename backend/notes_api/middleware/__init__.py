"""
HTTP middleware for the Notes API.

Order on the way in: rate limit, request context (ID + access log),
GZip, CORS, then the route.
"""
