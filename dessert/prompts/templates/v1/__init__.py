"""Version 1 prompt templates."""

from .user import user_prompt_create_test_v1, user_prompt_extend_test_v1

__all__ = ["user_prompt_create_test_v1", "user_prompt_extend_test_v1"]
