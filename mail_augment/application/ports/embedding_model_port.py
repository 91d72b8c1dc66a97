# mail_augment/application/ports/embedding_model_port.py
import abc
from typing import List, Tuple, Dict, Any

class EmbeddingError(Exception):
    """Raised when a vector cannot be obtained from the embedding model."""
    pass

class EmbeddingModelPort(abc.ABC):
    """
    Abstract port defining the interface for a remote embedding model.
    """

    @abc.abstractmethod
    async def embed_content(self, text: str) -> List[float]:
        """
        Generates the embedding for a single text.

        Raises:
            EmbeddingError: If the call fails or the response carries no vector.
        """
        raise NotImplementedError

    @abc.abstractmethod
    async def batch_embed_contents(self, texts: List[str]) -> List[List[float]]:
        """
        Generates embeddings for several texts in one request.

        Args:
            texts: The strings to embed, in order.

        Returns:
            One embedding per input text, in the same order.

        Raises:
            EmbeddingError: If the call fails for any reason. There is no
                partial result.
        """
        raise NotImplementedError

    @abc.abstractmethod
    def get_model_info(self) -> Dict[str, Any]:
        """
        Returns information about the embedding model.

        Returns:
            A dictionary containing model_name, dimension, etc.
        """
        raise NotImplementedError

    @abc.abstractmethod
    async def health_check(self) -> Tuple[bool, str]:
        """
        Returns a tuple (is_healthy: bool, status_message: str).
        """
        raise NotImplementedError

    async def close(self) -> None:
        """Releases network resources held by the adapter."""
        return None
