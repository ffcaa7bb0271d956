"""
Backend package for the user API.

User documents live in object storage, one JSON object per user. This
package provides the handlers, a FastAPI application and the storage
abstraction they share.
"""
