"""
Service layer.

Each service encapsulates the business logic for one domain and is
constructed per request around the application's shared ``MongoStore``.
Services raise the errors from ``core.errors``; they never build HTTP
responses themselves.
"""
