# mail_augment/application/ports/text_generation_port.py
from abc import ABC, abstractmethod
from typing import List, Tuple

class TextGenerationError(Exception):
    """Base exception for text generation errors."""
    pass

class TextGenerationPort(ABC):
    """
    Interface (Port) for a remote text generation model.
    """

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        temperature: float,
        max_output_tokens: int,
    ) -> List[str]:
        """
        Sends a prompt to the model.

        Args:
            prompt: The full prompt text.
            temperature: Sampling temperature.
            max_output_tokens: Upper bound on the completion length.

        Returns:
            The text of each candidate, in the order the provider returned
            them. A candidate whose text cannot be read is returned as "".

        Raises:
            TextGenerationError: If the request fails.
        """
        pass

    @abstractmethod
    async def health_check(self) -> Tuple[bool, str]:
        pass

    async def close(self) -> None:
        return None
