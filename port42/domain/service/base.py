"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Services hold the business rules that span repositories: vote ledger,
    comment tree, resource submission.
    """

    pass
