from typing import Any, Dict, Mapping, Optional, Union

from graphql import DocumentNode, print_ast


class Operation:
    """GraphQL operation to be sent by an upload transport."""

    def __init__(
        self,
        query: Union[DocumentNode, "Operation", str],
        *,
        variable_values: Optional[Dict[str, Any]] = None,
        operation_name: Optional[str] = None,
        extensions: Optional[Dict[str, Any]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        """Initialize a GraphQL operation.

        :param query: GraphQL query as a string or as a DocumentNode object.
             A string is kept verbatim, a DocumentNode is printed.
        :param variable_values: Dictionary of input parameters (Default: None).
             The values may contain :class:`FileVar <gql_upload.FileVar>` objects.
        :param operation_name: Name of the operation (Default: None).
        :param extensions: Extension metadata, only sent when the transport
             is configured with :code:`include_extensions=True`.
        :param context: Initial content of the shared context.
        """
        if isinstance(query, Operation):
            self.query: str = query.query
            if variable_values is None:
                variable_values = query.variable_values
            if operation_name is None:
                operation_name = query.operation_name
            if extensions is None:
                extensions = query.extensions
        elif isinstance(query, DocumentNode):
            self.query = print_ast(query)
        elif isinstance(query, str):
            self.query = query
        else:
            raise TypeError(f"Unexpected type for Operation: {type(query)}")

        self.variable_values: Optional[Dict[str, Any]] = variable_values
        self.operation_name: Optional[str] = operation_name
        self.extensions: Optional[Dict[str, Any]] = extensions
        self._context: Dict[str, Any] = dict(context or {})

    def get_context(self) -> Dict[str, Any]:
        return self._context

    def set_context(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        self._context.update(values)
        return self._context

    @property
    def payload(self) -> Dict[str, Any]:
        return {
            "operationName": self.operation_name,
            "variables": self.variable_values,
            "query": self.query,
        }

    def __str__(self):
        return str(self.payload)


def gql(request_string: str, **kwargs: Any) -> Operation:
    """Build an :class:`Operation <gql_upload.Operation>` from a query string.

    The string is not parsed: upload transports rewrite the query text
    before sending it, so it is kept exactly as written.
    """
    return Operation(request_string, **kwargs)
