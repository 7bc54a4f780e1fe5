from __future__ import annotations

import argparse
from pathlib import Path

from sentence_transformers import SentenceTransformer

from atsmatch.core.config import settings


def main() -> None:
    parser = argparse.ArgumentParser(description="Download the embedding model used for semantic keyword extraction.")
    parser.add_argument("--model", default=settings.semantic_model_name, help="Sentence-transformers model id")
    parser.add_argument(
        "--out",
        default="",
        help="Optional directory to save a local copy (point SEMANTIC_MODEL_NAME at it).",
    )
    args = parser.parse_args()

    print(f"Loading model {args.model} (downloads on first use)...")
    model = SentenceTransformer(args.model)
    dimension = model.get_sentence_embedding_dimension()
    probe = model.encode(["python developer"], normalize_embeddings=True)
    print(f"Model ready: dimension={dimension} probe_shape={tuple(probe.shape)}")

    if args.out:
        out_dir = Path(args.out)
        out_dir.mkdir(parents=True, exist_ok=True)
        model.save(str(out_dir))
        print(f"Saved model to {out_dir}")


if __name__ == "__main__":
    main()
