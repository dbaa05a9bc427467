"""
Shared module package.

Contains cross-cutting concerns used by every feature module:
- Error taxonomy and the global error sink
- Response envelopes
- Request validation
- Security gates and middleware
- Logging configuration
"""
