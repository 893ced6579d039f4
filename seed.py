"""
One-time ingestion of reference documents into the vector index.

Usage:
    python seed.py [documents_dir]
"""
import asyncio
import sys
from pathlib import Path

import openai
from qdrant_client import AsyncQdrantClient

from config import Config
from services.ingestion import DocumentIngestor
from utils.http_client import HTTPClientManager
from utils.logger import app_logger


async def seed(documents_dir: str | None = None) -> int:
    """Run the ingestion job. Returns a process exit code."""
    app_logger.info("Starting ingestion...")

    if not Config.OPENAI_API_KEY or not Config.QDRANT_URL:
        app_logger.error("Missing configuration: OPENAI_API_KEY and QDRANT_URL must be set in .env")
        return 1

    docs_dir = Path(documents_dir or Config.DOCUMENTS_DIR)
    if not docs_dir.is_dir():
        app_logger.error(f"No documents folder found at {docs_dir.resolve()}")
        return 1

    http_clients = HTTPClientManager()
    embeddings_client = openai.AsyncOpenAI(
        api_key=Config.OPENAI_API_KEY,
        base_url=Config.OPENAI_BASE_URL,
        http_client=http_clients.get_api_client(),
    )
    vector_client = AsyncQdrantClient(url=Config.QDRANT_URL, api_key=Config.QDRANT_API_KEY)
    ingestor = DocumentIngestor(embeddings_client, vector_client)

    try:
        report = await ingestor.ingest_directory(docs_dir)
    except Exception as e:
        app_logger.error(f"Ingestion aborted: {e}", exc_info=e)
        return 1
    finally:
        await vector_client.close()
        await embeddings_client.close()
        await http_clients.close_all()

    app_logger.info(
        "Library updated successfully!",
        extra={"filesProcessed": report.files_processed, "chunksUploaded": report.chunks_uploaded}
    )
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(seed(sys.argv[1] if len(sys.argv) > 1 else None)))
