from .backend import InMemoryStorage, SessionStorage
from .dynamodb import DynamoDBStorage
from .s3 import S3Storage

__all__ = ["SessionStorage", "InMemoryStorage", "S3Storage", "DynamoDBStorage"]
