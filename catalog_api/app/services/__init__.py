"""
Service layer.

Each service encapsulates the business rules for one resource on top of
a repository and reports operational counters to an injected sink.
Services raise the error kinds from ``core.exceptions`` and leave their
translation to HTTP to the routers.
"""
