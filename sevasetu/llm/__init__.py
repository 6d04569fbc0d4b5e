# sevasetu/llm/__init__.py
from .client import LLMClient, OpenAILLMClient
from .parsing import clean_json_from_llm, parse_llm_json

__all__ = ["LLMClient", "OpenAILLMClient", "clean_json_from_llm", "parse_llm_json"]
