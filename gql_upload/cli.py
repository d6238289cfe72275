import asyncio
import json
import logging
import sys
from argparse import ArgumentParser, Namespace, RawDescriptionHelpFormatter
from typing import Any, Dict, Optional

from yarl import URL

from gql_upload import AIOHTTPUploadTransport, Client, FileVar, Operation, __version__
from gql_upload.transport.exceptions import TransportError, TransportQueryError

description = """
Send GraphQL operations with file uploads from the command line using http(s).
If used interactively, write your query, then use Ctrl-D (EOF) to execute it.
"""

examples = """
EXAMPLES
========

# Simple query using https
echo '{ user(id: $id) { name } }' | \
gql-upload-cli https://your_server.com/graphql --variables id:5

# Upload a file
echo 'mutation($file: Upload!) { uploadFile(file: $file) { success } }' | \
gql-upload-cli https://your_server.com/graphql --files file:./report.pdf

# Execute query saved in a file
cat query.gql | gql-upload-cli https://your_server.com/graphql

"""


def get_parser(with_examples: bool = False) -> ArgumentParser:
    """Provides an ArgumentParser for the gql-upload-cli script.

    :param with_examples: set to False by default so that the examples are not
                          present in the usage message
    """

    parser = ArgumentParser(
        description=description,
        epilog=examples if with_examples else None,
        formatter_class=RawDescriptionHelpFormatter,
    )
    parser.add_argument("server", help="the server url starting with http:// or https://")
    parser.add_argument(
        "-V",
        "--variables",
        nargs="*",
        help="query variables in the form key:json_value",
    )
    parser.add_argument(
        "-F",
        "--files",
        nargs="*",
        help="files to upload in the form key:file_path",
    )
    parser.add_argument(
        "-H", "--headers", nargs="*", help="http headers in the form key:value"
    )
    parser.add_argument("--version", action="version", version=f"v{__version__}")
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "-d",
        "--debug",
        help="print lots of debugging statements (loglevel==DEBUG)",
        action="store_const",
        dest="loglevel",
        const=logging.DEBUG,
    )
    group.add_argument(
        "-v",
        "--verbose",
        help="show low level messages (loglevel==INFO)",
        action="store_const",
        dest="loglevel",
        const=logging.INFO,
    )
    parser.add_argument(
        "-o",
        "--operation-name",
        help="set the operation_name value",
        dest="operation_name",
    )
    parser.add_argument(
        "--execute-timeout",
        help="maximum time in seconds to wait for an answer (default: 10)",
        type=float,
        dest="execute_timeout",
        default=10,
    )

    return parser


def get_transport_args(args: Namespace) -> Dict[str, Any]:
    """Extract extra arguments necessary for the transport
    from the parsed command line args

    Will create a headers dict by splitting the colon
    in the --headers arguments

    :param args: parsed command line arguments
    """

    transport_args: Dict[str, Any] = {}

    # Parse the headers argument
    headers = {}
    if args.headers is not None:
        for header in args.headers:

            try:
                # Split only the first colon (throw a ValueError if no colon is present)
                header_key, header_value = header.split(":", 1)

                headers[header_key] = header_value

            except ValueError:
                raise ValueError(f"Invalid header: {header}")

    if args.headers is not None:
        transport_args["headers"] = headers

    return transport_args


def get_variable_values(args: Namespace) -> Optional[Dict[str, Any]]:
    """Extract the variable_values from the --variables and --files arguments

    For --variables, split the first colon, then load the json value,
    adding double quotes around the value if it does not work first
    in order to simplify the passing of simple string values
    (we allow --variables KEY:VALUE instead of KEY:\"VALUE\")

    For --files, split the first colon and use the file path
    inside a FileVar.

    :param args: parsed command line arguments
    """

    if args.variables is None and args.files is None:
        return None

    variables: Dict[str, Any] = {}

    for var in args.variables or []:

        try:
            # Split only the first colon
            # (throw a ValueError if no colon is present)
            variable_key, variable_json_value = var.split(":", 1)

            # Extract the json value,
            # trying with double quotes if it does not work
            try:
                variable_value = json.loads(variable_json_value)
            except json.JSONDecodeError:
                try:
                    variable_value = json.loads(f'"{variable_json_value}"')
                except json.JSONDecodeError:
                    raise ValueError

            # Save the value in the variables dict
            variables[variable_key] = variable_value

        except ValueError:
            raise ValueError(f"Invalid variable: {var}")

    for file_arg in args.files or []:

        try:
            file_key, file_path = file_arg.split(":", 1)
        except ValueError:
            raise ValueError(f"Invalid file: {file_arg}")

        variables[file_key] = FileVar(file_path)

    return variables


def get_transport(args: Namespace) -> AIOHTTPUploadTransport:
    """Instanciate a transport from the parsed command line arguments

    :param args: parsed command line arguments
    """

    # Get the url scheme from server parameter
    url = URL(args.server)

    if url.scheme not in ["http", "https"]:
        raise ValueError("URL protocol should be one of: http, https")

    # Get extra transport parameters from command line arguments
    # (headers)
    transport_args = get_transport_args(args)

    return AIOHTTPUploadTransport(url=args.server, **transport_args)


async def main(args: Namespace) -> int:
    """Main entrypoint of the gql-upload-cli script

    :param args: The parsed command line arguments
    :return: The script exit code (0 = ok, 1 = error)
    """

    # Set requested log level
    if args.loglevel is not None:
        logging.basicConfig(level=args.loglevel)

    try:
        # Instanciate transport from command line arguments
        transport = get_transport(args)

        # Get the variables from command line arguments
        variable_values = get_variable_values(args)

    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    # By default, the exit_code is 0 (everything is ok)
    exit_code = 0

    # Connect to the backend and provide a session
    client = Client(transport=transport, execute_timeout=args.execute_timeout)

    async with client as session:

        while True:

            # Read multiple lines from input and trim whitespaces
            # Will read until EOF character is received (Ctrl-D)
            query_str = sys.stdin.read().strip()

            # Exit if query is empty
            if len(query_str) == 0:
                break

            operation = Operation(
                query_str,
                variable_values=variable_values,
                operation_name=args.operation_name,
            )

            try:
                result = await session.execute(operation)
                print(json.dumps(result))
            except TransportQueryError as e:
                print(e, file=sys.stderr)
                exit_code = 1
            except (TransportError, TimeoutError) as e:
                print(f"Error: {e!r}", file=sys.stderr)
                exit_code = 1

    return exit_code


def gql_upload_cli() -> None:
    """Synchronous entrypoint used by the console script"""

    parser = get_parser(with_examples=True)
    args = parser.parse_args()

    sys.exit(asyncio.run(main(args)))
