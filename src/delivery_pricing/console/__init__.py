"""Console subpackage - interactive terminal front end."""
from .prompt_loop import PromptLoop, main

__all__ = ['PromptLoop', 'main']
