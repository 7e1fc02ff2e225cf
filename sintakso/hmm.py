"""
Trigram Hidden Markov Model part-of-speech tagger.

Emission P(word | tag) and transition P(t_i | t_{i-2}, t_{i-1}) tables are
add-k smoothed and kept as numpy arrays in log space. Decoding is Viterbi
over (previous tag, current tag) pair states.

Words never seen in training are scored with an open-class distribution
estimated from hapax legomena: words that occur once behave much like
unseen ones, and they are almost always nouns, verbs, adjectives, adverbs
or names.
"""
import json
import logging
import zipfile
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .errors import TagError
from .logging_config import ProgressLogger
from .nodes import OPEN_CLASS_TAGS

logger = logging.getLogger(__name__)

START = "<START>"


class HMMTagger:
    """
    Trigram HMM tagger.

    Attributes:
        smoothing_k: Add-k smoothing constant.
        tags: Tag inventory seen in training, sorted.
        vocabulary: Lowercased word -> column in the emission table.
        emission: (num_tags, vocab_size) log P(word | tag).
        unknown: (num_tags,) log P(unseen word | tag).
        transition: (num_tags + 1, num_tags + 1, num_tags) log
            P(t_i | t_{i-2}, t_{i-1}); index num_tags is <START>.
        metadata: trained_at, training_size, num_tags, vocab_size, smoothing_k.
    """

    def __init__(self, smoothing_k: float = 0.001):
        if smoothing_k <= 0:
            raise ValueError(f"smoothing_k must be positive, got {smoothing_k}")
        self.smoothing_k = smoothing_k
        self.tags: List[str] = []
        self.tag_index: Dict[str, int] = {}
        self.vocabulary: Dict[str, int] = {}
        self.emission: Optional[np.ndarray] = None
        self.unknown: Optional[np.ndarray] = None
        self.transition: Optional[np.ndarray] = None
        self.metadata: Dict = {}

    @property
    def trained(self) -> bool:
        return self.emission is not None

    # ========================================================================
    # Training
    # ========================================================================

    def train(self, data: Iterable[Tuple[Sequence[str], Sequence[str]]]) -> "HMMTagger":
        """
        Estimate the model from tagged sentences.

        Args:
            data: Iterable of (words, tags) pairs of equal length.

        Returns:
            self, so that ``HMMTagger().train(corpus)`` reads naturally.
        """
        sentences = []
        for words, tags in data:
            if len(words) != len(tags):
                raise TagError(f"Sentence has {len(words)} words but {len(tags)} tags")
            if words:
                sentences.append(([word.lower() for word in words], list(tags)))
        if not sentences:
            raise TagError("Cannot train an HMM on an empty corpus")

        self.tags = sorted({tag for _, tags in sentences for tag in tags})
        self.tag_index = {tag: i for i, tag in enumerate(self.tags)}
        self.vocabulary = {
            word: i for i, word in enumerate(sorted({word for words, _ in sentences for word in words}))
        }
        num_tags, vocab_size = len(self.tags), len(self.vocabulary)
        start = num_tags

        emission_counts = np.zeros((num_tags, vocab_size))
        transition_counts = np.zeros((num_tags + 1, num_tags + 1, num_tags))

        progress = ProgressLogger(len(sentences), desc="Training HMM", logger=logger)
        for words, tags in sentences:
            prev2, prev1 = start, start
            for word, tag in zip(words, tags):
                tag_id = self.tag_index[tag]
                emission_counts[tag_id, self.vocabulary[word]] += 1
                transition_counts[prev2, prev1, tag_id] += 1
                prev2, prev1 = prev1, tag_id
            progress.update()
        progress.close()

        k = self.smoothing_k
        tag_totals = emission_counts.sum(axis=1)
        # One extra slot per tag is reserved for unseen words
        denominator = tag_totals[:, None] + k * (vocab_size + 1)
        self.emission = np.log((emission_counts + k) / denominator)
        self.unknown = self._unknown_distribution(emission_counts, tag_totals)

        history_totals = transition_counts.sum(axis=2, keepdims=True)
        self.transition = np.log((transition_counts + k) / (history_totals + k * num_tags))

        self.metadata = {
            "trained_at": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            "training_size": len(sentences),
            "num_tags": num_tags,
            "vocab_size": vocab_size,
            "smoothing_k": k,
        }
        logger.info(
            f"Trained HMM on {len(sentences)} sentences: {num_tags} tags, {vocab_size} word types"
        )
        return self

    def _unknown_distribution(self, emission_counts: np.ndarray, tag_totals: np.ndarray) -> np.ndarray:
        """
        log P(unseen word | tag), restricted to open classes.

        P(tag | hapax) is scaled by the unseen-word mass P(hapax) and divided
        by the tag prior, which turns it back into an emission score.
        """
        k = self.smoothing_k
        word_counts = emission_counts.sum(axis=0)
        hapax = word_counts == 1
        hapax_by_tag = emission_counts[:, hapax].sum(axis=1)

        open_mask = np.array([tag in OPEN_CLASS_TAGS for tag in self.tags])
        if not open_mask.any():
            open_mask[:] = True

        total = tag_totals.sum()
        tag_given_hapax = (hapax_by_tag + k) / (hapax_by_tag[open_mask].sum() + k * open_mask.sum())
        unknown_mass = (hapax.sum() + k) / (total + k)
        prior = (tag_totals + k) / (total + k * len(self.tags))

        with np.errstate(divide="ignore"):
            scores = np.log(tag_given_hapax) + np.log(unknown_mass) - np.log(prior)
        return np.where(open_mask, scores, -np.inf)

    # ========================================================================
    # Decoding
    # ========================================================================

    def predict(self, words: Sequence[str], constraints: Optional[Dict[int, str]] = None) -> List[str]:
        """
        Most probable tag sequence for ``words``.

        Args:
            words: Surface forms, any case.
            constraints: Optional {position: tag} pins. A pinned position only
                allows its tag when the model knows it; unknown pinned tags
                are decoded freely and overwritten in the result.

        Returns:
            One tag per word.
        """
        if not self.trained:
            raise TagError("HMM model has not been trained or loaded")
        if not words:
            return []
        constraints = constraints or {}

        num_tags = len(self.tags)
        start = num_tags
        emissions = [self._emission_scores(word.lower(), constraints.get(i)) for i, word in enumerate(words)]

        delta = np.full((num_tags + 1, num_tags), -np.inf)
        delta[start] = self.transition[start, start] + emissions[0]
        backpointers = []

        for scores_i in emissions[1:]:
            # scores[p, q, c]: best path ending (p, q) extended by c
            scores = delta[:, :, None] + self.transition[:, :num_tags, :]
            backpointers.append(scores.argmax(axis=0))
            delta = np.full((num_tags + 1, num_tags), -np.inf)
            delta[:num_tags] = scores.max(axis=0) + scores_i[None, :]

        prev, cur = np.unravel_index(np.argmax(delta), delta.shape)
        path = [int(cur)]
        if len(words) > 1:
            path.append(int(prev))
            for pointers in reversed(backpointers[1:]):
                prev, cur = pointers[prev, cur], prev
                path.append(int(prev))
        path.reverse()

        tags = [self.tags[i] for i in path]
        for position, tag in constraints.items():
            tags[position] = tag
        return tags

    def _emission_scores(self, word: str, pinned: Optional[str]) -> np.ndarray:
        if pinned is not None and pinned in self.tag_index:
            scores = np.full(len(self.tags), -np.inf)
            scores[self.tag_index[pinned]] = 0.0
            return scores
        column = self.vocabulary.get(word)
        if column is None:
            return self.unknown
        return self.emission[:, column]

    # ========================================================================
    # Persistence
    # ========================================================================

    def save(self, path) -> None:
        """Write the model to a compressed ``.npz`` file."""
        if not self.trained:
            raise TagError("Cannot save an untrained HMM model")
        words = sorted(self.vocabulary, key=self.vocabulary.get)
        np.savez_compressed(
            path,
            tags=np.array(self.tags, dtype=str),
            vocabulary=np.array(words, dtype=str),
            emission=self.emission,
            unknown=self.unknown,
            transition=self.transition,
            smoothing_k=np.array(self.smoothing_k),
            metadata=np.array(json.dumps(self.metadata)),
        )
        logger.info(f"Saved HMM model to {path}")

    @classmethod
    def load(cls, path) -> "HMMTagger":
        """
        Load a model written by :meth:`save`.

        Raises:
            TagError: The file is missing, unreadable or inconsistent.
        """
        try:
            with np.load(path, allow_pickle=False) as blob:
                model = cls(smoothing_k=float(blob["smoothing_k"]))
                model.tags = [str(tag) for tag in blob["tags"]]
                model.tag_index = {tag: i for i, tag in enumerate(model.tags)}
                model.vocabulary = {str(word): i for i, word in enumerate(blob["vocabulary"])}
                model.emission = blob["emission"]
                model.unknown = blob["unknown"]
                model.transition = blob["transition"]
                model.metadata = json.loads(str(blob["metadata"]))
        except (OSError, EOFError, ValueError, KeyError, zipfile.BadZipFile) as e:
            raise TagError(f"Cannot load HMM model from {path}: {e}") from e

        num_tags, vocab_size = len(model.tags), len(model.vocabulary)
        if (model.emission.shape != (num_tags, vocab_size)
                or model.unknown.shape != (num_tags,)
                or model.transition.shape != (num_tags + 1, num_tags + 1, num_tags)):
            raise TagError(f"HMM model in {path} has inconsistent table shapes")

        logger.debug(f"Loaded HMM model from {path}: {num_tags} tags, {vocab_size} word types")
        return model
