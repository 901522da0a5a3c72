"""Base class for comment engine domain services."""


class Service:
    """Marker base for domain services.

    Services own the rules that span the comment tree and the like ledger:
    level derivation, counter bookkeeping and pagination windows. They talk
    to storage only through repository interfaces.
    """

    pass
