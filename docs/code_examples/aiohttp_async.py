import asyncio

from gql_upload import AIOHTTPUploadTransport, Client, gql


async def main():

    # Select your transport with a defined url endpoint
    transport = AIOHTTPUploadTransport(url="https://countries.trevorblades.com/graphql")

    # Create a GraphQL client using the defined transport
    client = Client(transport=transport)

    # Provide a GraphQL query
    # The variables are inlined in the query text before being sent
    query = gql(
        """
        query getContinentName ($code: ID!) {
          continent (code: $code) {
            name
          }
        }
    """,
        variable_values={"code": "EU"},
    )

    # Using `async with` on the client will start a connection on the transport
    # and provide a `session` variable to execute queries on this connection
    async with client as session:

        # Execute the query
        result = await session.execute(query)
        print(result)


asyncio.run(main())
