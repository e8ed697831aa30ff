from abc import ABC, abstractmethod


class PushChannelPort(ABC):
    @abstractmethod
    async def subscribe(self, room: str) -> None:
        """(Re-)establish the server-side subscription for a room."""
        raise NotImplementedError

    async def aclose(self) -> None:
        return None
