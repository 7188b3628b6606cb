"""AWS SQS queue transport (long polling via boto3)."""

from ordering.messaging.transport.port import QueueMessage, QueueTransport


class SqsQueueTransport(QueueTransport):
    """Receives from and deletes on a single SQS queue."""

    def __init__(self, sqs_client, queue_url: str) -> None:
        self._client = sqs_client
        self.queue_url = queue_url

    def receive(self, max_messages: int, wait_seconds: int) -> list[QueueMessage]:
        response = self._client.receive_message(
            QueueUrl=self.queue_url,
            MaxNumberOfMessages=max_messages,
            WaitTimeSeconds=wait_seconds,
        )
        return [
            QueueMessage(
                message_id=message["MessageId"],
                receipt_handle=message["ReceiptHandle"],
                body=message.get("Body", ""),
            )
            for message in response.get("Messages", [])
        ]

    def delete(self, receipt_handle: str) -> None:
        self._client.delete_message(QueueUrl=self.queue_url, ReceiptHandle=receipt_handle)
