"""
Training corpora and tagger evaluation.

Reads Universal Dependencies CoNLL-U files into (words, tags) sentence pairs,
the input format of HMMTagger.train and NeuralTagger.train.
"""
import logging
import random
from pathlib import Path
from typing import List, Sequence, Tuple

from conllu import parse_incr
from conllu.exceptions import ParseException

from .errors import SintaksoError
from .nodes import UNRESOLVED

logger = logging.getLogger(__name__)

TaggedSentence = Tuple[List[str], List[str]]


def read_conllu(path) -> List[TaggedSentence]:
    """
    Read a CoNLL-U file.

    Multi-word token ranges (``3-4``) and empty nodes (``5.1``) are
    skipped. Tags are lowercased (``NOUN`` -> ``noun``); an unset UPOS
    (``_``) becomes ``x``.

    Args:
        path: Path to the .conllu file.

    Returns:
        List of (words, tags) pairs, one per sentence.

    Raises:
        SintaksoError: The file is not valid CoNLL-U or a token has no UPOS column.
    """
    path = Path(path)
    sentences = []
    with open(path, "r", encoding="utf-8") as f:
        try:
            for number, token_list in enumerate(parse_incr(f), start=1):
                words, tags = [], []
                for token in token_list:
                    if not isinstance(token["id"], int):
                        continue
                    if "upos" not in token:
                        raise SintaksoError(
                            f"{path}: sentence {number}: token {token['id']} ({token['form']}) has no UPOS column"
                        )
                    upos = token["upos"]
                    words.append(token["form"])
                    tags.append(UNRESOLVED if upos in (None, "_") else upos.lower())
                if words:
                    sentences.append((words, tags))
        except ParseException as e:
            raise SintaksoError(f"{path}: {e}") from e

    logger.info(f"Read {len(sentences)} sentences from {path}")
    return sentences


def accuracy(predicted: Sequence[Sequence[str]], gold: Sequence[Sequence[str]]) -> float:
    """
    Token-level tagging accuracy.

    Args:
        predicted: Tag sequences, one per sentence.
        gold: Reference tag sequences, aligned with ``predicted``.

    Returns:
        Fraction of matching tags (0.0 for an empty corpus).
    """
    if len(predicted) != len(gold):
        raise ValueError(f"{len(predicted)} predicted sentences but {len(gold)} gold sentences")
    correct = total = 0
    for predicted_tags, gold_tags in zip(predicted, gold):
        if len(predicted_tags) != len(gold_tags):
            raise ValueError("Predicted and gold sentences differ in length")
        correct += sum(p == g for p, g in zip(predicted_tags, gold_tags))
        total += len(gold_tags)
    return correct / total if total else 0.0


def train_dev_split(sentences: Sequence[TaggedSentence], dev_ratio: float = 0.1,
                    seed: int = 42) -> Tuple[List[TaggedSentence], List[TaggedSentence]]:
    """Shuffle deterministically and hold out ``dev_ratio`` of the sentences."""
    if not 0.0 <= dev_ratio < 1.0:
        raise ValueError(f"dev_ratio must be in [0, 1), got {dev_ratio}")
    shuffled = list(sentences)
    random.Random(seed).shuffle(shuffled)
    cut = int(len(shuffled) * (1.0 - dev_ratio))
    return shuffled[:cut], shuffled[cut:]
