"""Abstract interface (port) for embedding generation."""

from abc import ABC, abstractmethod


class EmbeddingProvider(ABC):
    """Port for generating text embeddings — implemented in the infrastructure layer."""

    @abstractmethod
    async def generate_embeddings(self, texts: list[str]) -> list[list[float]]:
        """Generate embedding vectors for a batch of texts.

        Args:
            texts: List of text strings to embed.

        Returns:
            List of embedding vectors, one per input text.
            Each vector has ``dimensions`` entries.
        """
        ...

    async def generate_query_embedding(self, query: str) -> list[float]:
        """Generate a single embedding for a search query."""
        return await self.embed(query)

    async def embed(self, text: str) -> list[float]:
        """Generate the embedding of a single text span."""
        results = await self.generate_embeddings([text])
        return results[0]

    @property
    @abstractmethod
    def dimensions(self) -> int:
        """Return the dimensionality of the embedding vectors produced by this provider."""
        ...

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Label of the model behind the vectors, stored with every chunk."""
        ...

    @property
    def is_offline(self) -> bool:
        """Whether vectors are generated locally without semantic meaning."""
        return False

    async def aclose(self) -> None:
        """Release held network connections. No-op by default."""
        return None
