import asyncio

from gql_upload import AIOHTTPUploadTransport, Client, FileVar, gql


async def main():

    transport = AIOHTTPUploadTransport(url="YOUR_URL")

    client = Client(transport=transport)

    query = gql(
        """
        mutation($file: Upload!) {
          singleUpload(file: $file) {
            id
          }
        }
    """
    )

    async with client as session:

        # Files are sent following the GraphQL multipart request spec
        query.variable_values = {
            "file": FileVar("YOUR_FILE_PATH", content_type="application/pdf"),
        }

        result = await session.execute(query)
        print(result)

        # Big files can be streamed from the disk with aiofiles
        query.variable_values = {
            "file": FileVar("YOUR_BIG_FILE_PATH", streaming=True),
        }

        result = await session.execute(query)
        print(result)


asyncio.run(main())
