"""String enums for catalog entity fields."""

from enum import StrEnum


class Protocol(StrEnum):
    KAFKA = "kafka"
    AMQP = "amqp"
    MQTT = "mqtt"
    NATS = "nats"
    REDIS = "redis"
    WEBHOOK = "webhook"
    HTTP = "http"
    DB = "db"


class ResourceMode(StrEnum):
    READ = "read"
    WRITE = "write"
    READWRITE = "readwrite"


class ResourceType(StrEnum):
    TOPIC = "topic"
    EXCHANGE = "exchange"
    QUEUE = "queue"
    TABLE = "table"
    ENDPOINT = "endpoint"


class SchemaType(StrEnum):
    JSONSCHEMA = "jsonschema"


class Direction(StrEnum):
    SENDS = "sends"
    RECEIVES = "receives"
