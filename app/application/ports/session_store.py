from abc import ABC, abstractmethod

from app.domain.entities.practice_session import PracticeSession


class SessionStorePort(ABC):
    @abstractmethod
    def get_session(self, session_id: str) -> PracticeSession | None:
        raise NotImplementedError

    @abstractmethod
    def put_session(self, session: PracticeSession) -> None:
        raise NotImplementedError

    @abstractmethod
    def list_sessions(self, group_code: str) -> list[PracticeSession]:
        """Sessions of one group, in creation order."""
        raise NotImplementedError

    @abstractmethod
    def delete_session(self, session_id: str) -> bool:
        """Remove a session together with its finalized entries. Returns True if it existed."""
        raise NotImplementedError
