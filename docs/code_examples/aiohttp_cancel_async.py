import asyncio

from gql_upload import AIOHTTPUploadTransport, Client, FileVar, gql


async def main():

    transport = AIOHTTPUploadTransport(url="YOUR_URL")

    query = gql(
        """
        mutation($file: Upload!) {
          singleUpload(file: $file) {
            id
          }
        }
    """,
        variable_values={"file": FileVar("YOUR_BIG_FILE_PATH", streaming=True)},
    )

    async with Client(transport=transport):

        # Using the transport directly returns an execution handle
        handle = transport.execute(query)

        handle.subscribe(
            on_next=lambda result: print(f"Result: {result.data}"),
            on_error=lambda error: print(f"Error: {error!r}"),
            on_complete=lambda: print("Complete"),
        )

        await asyncio.sleep(1)

        # Abort the upload if it is still in flight
        # Nothing is emitted after a cancellation
        if handle.cancel():
            print("Upload aborted")

        outcome = await handle
        print(outcome.kind)


asyncio.run(main())
