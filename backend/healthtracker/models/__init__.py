"""ORM models. Importing this package registers every table on Base.metadata."""

from healthtracker.models.run import Run
from healthtracker.models.weigh_in import WeighIn

__all__ = ["Run", "WeighIn"]
