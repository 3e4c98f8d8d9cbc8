from abc import ABC, abstractmethod

class BaseDatabaseDriver(ABC):
    """Lifecycle contract for a database driver held by the container.

    ``connect`` verifies the backend is reachable at startup; ``disconnect``
    releases pooled connections at shutdown.
    """

    @abstractmethod
    async def connect(self):
        pass

    @abstractmethod
    async def disconnect(self):
        pass
