"""Security gates and middleware: authentication, rate limiting, headers."""
