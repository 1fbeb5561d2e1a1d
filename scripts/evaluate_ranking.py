import json
import logging
import os
import sys

from webrank.core.config import SearchConfig
from webrank.search import ProcessedDocument, QueryExpander, rank

EVAL_FILE = os.path.join(os.path.dirname(__file__), "..", "data", "evaluation_set.json")

logger = logging.getLogger(__name__)


def load_eval_set(path: str) -> list[dict]:
    if not os.path.exists(path):
        logger.warning(f"Evaluation file not found at {path}.")
        return []
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def evaluate_mrr(eval_set: list[dict], config: SearchConfig, k: int = 10) -> float:
    # Local expansion only, so runs are reproducible
    expander = QueryExpander(config.query_expansion)
    score_sum = 0.0
    for case in eval_set:
        expanded = expander.expand_local(case["query"])
        documents = [ProcessedDocument(**d) for d in case["documents"]]
        results = rank(documents, expanded, config)[:k]

        rank_pos = 0
        for i, hit in enumerate(results):
            if hit.url == case["url"]:
                rank_pos = i + 1
                break

        if rank_pos > 0:
            score_sum += 1.0 / rank_pos

    return score_sum / len(eval_set) if eval_set else 0.0


def run_evaluation(path: str = EVAL_FILE) -> None:
    logging.basicConfig(level=logging.INFO)
    dataset = load_eval_set(path)
    if not dataset:
        logger.info("No dataset found.")
        return

    config = SearchConfig.from_settings()
    mrr = evaluate_mrr(dataset, config, k=config.max_results)
    logger.info(f"Queries: {len(dataset)}")
    logger.info(f"MRR (Mean Reciprocal Rank, {config.algorithm.value}): {mrr:.4f}")


if __name__ == "__main__":
    run_evaluation(sys.argv[1] if len(sys.argv) > 1 else EVAL_FILE)
