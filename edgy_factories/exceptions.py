from edgy.exceptions import EdgyException


class FactoryException(EdgyException):
    """
    Base exception class for all errors raised by the model factories.

    It inherits from `EdgyException`, so the factory errors stay part of the
    Edgy exception hierarchy and carry the same optional `detail`.
    """


class ImproperlyConfigured(FactoryException):
    """
    Raised when a relation mapping declared on a model is malformed.

    Typical causes are a `join` column which is not written as `table.column`
    or an unknown relation kind.
    """


class RelationNotDefined(FactoryException):
    """
    Raised when a relation directive references a relation that is not
    declared in the `relation_mappings()` of the model.
    """

    def __init__(self, relation_name: str) -> None:
        self.relation_name = relation_name
        super().__init__(f'The relation "{relation_name}" is not defined')


class RelationResolutionError(FactoryException):
    """
    Raised when the value of a relation directive cannot be turned into a
    local key value (belongs-to) or into a set of related records (has-many).
    """

    def __init__(self, relation_name: str, detail: str = "") -> None:
        self.relation_name = relation_name
        super().__init__(f'Unable to resolve the "{relation_name}" relation', detail=detail)

    def __str__(self) -> str:
        # Keep the relation message first, the detail is optional context.
        if self.detail:
            return f"{self.args[0]}: {self.detail}"
        return self.args[0]
