"""
Ingestion of reference documents into the vector index.
Splits text files into paragraph chunks, embeds each chunk and upserts it into Qdrant.
"""
import uuid
from dataclasses import dataclass
from pathlib import Path

import openai
from qdrant_client import AsyncQdrantClient
from qdrant_client import models as qmodels

from config import Config
from utils.logger import app_logger


@dataclass
class IngestionReport:
    """Summary of an ingestion run."""
    files_found: int = 0
    files_processed: int = 0
    chunks_uploaded: int = 0


def split_into_chunks(text: str, min_length: int = Config.MIN_CHUNK_LENGTH) -> list[str]:
    """Split text on blank lines, keeping fragments longer than min_length characters."""
    return [chunk for chunk in text.split("\n\n") if len(chunk) > min_length]


def chunk_point_id(source: str, index: int) -> str:
    """Deterministic point id for the index-th chunk of a source file."""
    return str(uuid.uuid5(uuid.NAMESPACE_URL, f"{source}-{index}"))


class DocumentIngestor:
    """Embeds document chunks and stores them in a vector collection."""

    def __init__(
        self,
        embeddings_client: openai.AsyncOpenAI,
        vector_client: AsyncQdrantClient,
        collection_name: str = Config.VECTOR_COLLECTION,
        embedding_model: str = Config.EMBEDDING_MODEL,
        min_chunk_length: int = Config.MIN_CHUNK_LENGTH,
    ):
        self._embeddings = embeddings_client
        self._vectors = vector_client
        self._collection = collection_name
        self._embedding_model = embedding_model
        self._min_chunk_length = min_chunk_length
        self._collection_ready = False

    async def generate_embedding(self, text: str) -> list[float]:
        """Embed one chunk of text."""
        response = await self._embeddings.embeddings.create(
            model=self._embedding_model,
            input=text,
        )
        return response.data[0].embedding

    async def ensure_collection(self, vector_size: int) -> None:
        """Create the collection on first use, sized to the embedding dimension."""
        if self._collection_ready:
            return

        if not await self._vectors.collection_exists(self._collection):
            app_logger.info(f"Creating collection '{self._collection}' (dim={vector_size})")
            await self._vectors.create_collection(
                collection_name=self._collection,
                vectors_config=qmodels.VectorParams(size=vector_size, distance=qmodels.Distance.COSINE),
            )
        self._collection_ready = True

    async def ingest_file(self, path: Path) -> int:
        """
        Embed and upsert every chunk of one text file.

        Args:
            path: Text file to ingest

        Returns:
            Number of chunks uploaded
        """
        source = path.name
        chunks = split_into_chunks(path.read_text(encoding="utf-8"), self._min_chunk_length)

        for index, chunk in enumerate(chunks):
            embedding = await self.generate_embedding(chunk)
            await self.ensure_collection(len(embedding))

            await self._vectors.upsert(
                collection_name=self._collection,
                points=[
                    qmodels.PointStruct(
                        id=chunk_point_id(source, index),
                        vector=embedding,
                        payload={"text": chunk, "source": source, "chunk_id": f"{source}-{index}"},
                    )
                ],
            )
            app_logger.info(f"   --> Uploaded chunk {index + 1}/{len(chunks)}", extra={"source": source})

        return len(chunks)

    async def ingest_directory(self, docs_dir: Path) -> IngestionReport:
        """
        Ingest every .txt file in a directory, stopping at the first failure.

        Args:
            docs_dir: Directory of reference documents

        Returns:
            IngestionReport with file and chunk counts
        """
        files = sorted(entry for entry in docs_dir.iterdir() if entry.is_file())
        report = IngestionReport(files_found=len(files))
        app_logger.info(f"Found {len(files)} files.", extra={"directory": str(docs_dir)})

        for path in files:
            if path.suffix != ".txt":
                continue

            app_logger.info(f"Processing {path.name}...")
            report.chunks_uploaded += await self.ingest_file(path)
            report.files_processed += 1

        return report
