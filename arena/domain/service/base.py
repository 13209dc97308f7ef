"""Base service class for domain services."""


class Service:
    """Base class for Arena domain services.

    Services own the rules that span an invitation and its collaborators
    (profile directory, match and audit stores). They are built per request
    with that request's repositories.
    """
