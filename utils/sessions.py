import threading

import requests

DEFAULT_USER_AGENT = "EmbedBot/1.0 (+https://github.com/embedbot/embedbot)"


class SessionFactory:
    """A reusable factory for creating and managing `requests` sessions.

    Blocking HTTP calls run in `asyncio.to_thread` workers, and `requests.Session` is not
    documented as thread-safe, so the factory keeps one session per worker thread. Each
    thread reuses its own session (connection pool and default headers) across calls.

    Attributes:
        user_agent (str): The User-Agent header applied to every session.

    Methods:
        get():
            Returns the calling thread's `requests.Session`, creating it on first use.
        close():
            Closes every session the factory has created.

    """

    def __init__(self, user_agent: str | None = None):
        """Initializes the SessionFactory with no active sessions."""
        self.user_agent = user_agent or DEFAULT_USER_AGENT
        self._local = threading.local()
        self._sessions: list[requests.Session] = []
        self._lock = threading.Lock()

    def get(self) -> requests.Session:
        """Retrieves the calling thread's `requests.Session` instance.

        Returns:
            requests.Session: The session owned by the current thread.

        Example Usage:
            session_factory = SessionFactory()
            session = session_factory.get()
            response = session.get("https://api.vxtwitter.com/Twitter/status/20")

        """
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            session.headers.update({"User-Agent": self.user_agent})
            self._local.session = session
            with self._lock:
                self._sessions.append(session)
        return session

    def close(self) -> None:
        with self._lock:
            sessions, self._sessions = self._sessions, []
        for session in sessions:
            session.close()
        self._local = threading.local()
