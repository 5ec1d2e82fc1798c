"""
Base processor class.
"""

from typing import Any, Awaitable, Callable, Dict


Handler = Callable[[Dict[str, Any]], Awaitable[Dict[str, Any]]]


class BaseProcessor:
    """
    Dispatches job messages to handlers by job_type.

    Subclasses fill in handlers():

        class MyProcessor(BaseProcessor):
            def handlers(self):
                return {"do_thing": self.handle_thing}
    """

    def handlers(self) -> Dict[str, Handler]:
        raise NotImplementedError

    @property
    def job_types(self) -> list[str]:
        return sorted(self.handlers())

    async def process(self, message: Dict[str, Any]) -> Dict[str, Any]:
        """Process a job message ({"job_type": ..., **params})."""
        job_type = message.get("job_type")
        handler = self.handlers().get(job_type)
        if handler is None:
            raise ValueError(f"Unknown job type: {job_type}")
        return await handler(message)
