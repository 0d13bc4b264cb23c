"""Task generation agent."""

from .agent import TaskGenerator, build_prompt, new_thread_id

__all__ = ["TaskGenerator", "build_prompt", "new_thread_id"]
