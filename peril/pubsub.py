"""Declaring queues and exchanging JSON messages over the message broker."""

from __future__ import annotations

import json
from enum import Enum, IntEnum
from typing import Any, Callable, TypeVar, Union

import pika
import pika.exceptions

DEAD_LETTER_EXCHANGE = "peril_dlx"
JSON_CONTENT_TYPE = "application/json"

T = TypeVar("T")


class AckType(str, Enum):
    """What to tell the broker about a message once it has been handled."""

    ACK = "ack"
    NACK_REQUEUE = "nack_requeue"
    NACK_DISCARD = "nack_discard"

    def __str__(self) -> str:
        return self.value


class SimpleQueueType(IntEnum):
    """Whether a queue survives broker restarts or lives only with its consumer."""

    DURABLE = 0
    TRANSIENT = 1


def declare_and_bind(
    connection: Any,
    exchange: str,
    queue_name: str,
    key: str,
    queue_type: Union[SimpleQueueType, int],
) -> tuple[Any, Any]:
    """Open a channel, declare the queue and bind it to the exchange.

    Returns the channel and the broker's reply to the queue declaration.
    """
    channel = connection.channel()
    durable = queue_type == SimpleQueueType.DURABLE
    declared = channel.queue_declare(
        queue=queue_name,
        durable=durable,
        exclusive=not durable,
        auto_delete=not durable,
        arguments={"x-dead-letter-exchange": DEAD_LETTER_EXCHANGE},
    )
    channel.queue_bind(queue=queue_name, exchange=exchange, routing_key=key)
    return channel, declared


def _encode_default(value: Any) -> Any:
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    raise TypeError(f"object of type {type(value).__name__} is not JSON serializable")


def encode_json(value: Any) -> bytes:
    """Serialize a value, using its to_dict method where it has one."""
    return json.dumps(value, default=_encode_default).encode("utf-8")


def publish_json(channel: Any, exchange: str, key: str, value: Any) -> None:
    """Publish a value as a JSON message to the exchange under the routing key."""
    body = encode_json(value)
    channel.basic_publish(
        exchange=exchange,
        routing_key=key,
        body=body,
        properties=pika.BasicProperties(content_type=JSON_CONTENT_TYPE),
    )


def subscribe_json(
    connection: Any,
    exchange: str,
    queue_name: str,
    key: str,
    queue_type: Union[SimpleQueueType, int],
    handler: Callable[[T], AckType],
    decode: Callable[[Any], T],
) -> Any:
    """Declare and bind a queue and register a handler for its JSON messages.

    Each message body is parsed as JSON, turned into a value by ``decode`` and
    passed to ``handler``, whose answer decides how the message is acknowledged.
    Messages that cannot be decoded are discarded. Returns the channel; the
    caller drives delivery, for instance with ``channel.start_consuming()``.
    """
    channel, _ = declare_and_bind(connection, exchange, queue_name, key, queue_type)

    def on_message(ch: Any, method: Any, properties: Any, body: bytes) -> None:
        tag = method.delivery_tag
        try:
            value = decode(json.loads(body))
        except (ValueError, TypeError, KeyError, AttributeError) as exc:
            print("error:", exc)
            ack = AckType.NACK_DISCARD
        else:
            ack = handler(value)
        try:
            if ack == AckType.ACK:
                ch.basic_ack(delivery_tag=tag)
            elif ack == AckType.NACK_DISCARD:
                ch.basic_nack(delivery_tag=tag, requeue=False)
            elif ack == AckType.NACK_REQUEUE:
                ch.basic_nack(delivery_tag=tag, requeue=True)
            print("ack-type:", ack)
        except pika.exceptions.AMQPError as exc:
            print("error:", exc)

    channel.basic_consume(
        queue=queue_name, on_message_callback=on_message, auto_ack=False
    )
    return channel