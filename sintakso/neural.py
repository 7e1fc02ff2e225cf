"""
BiLSTM part-of-speech tagger.

A word-level bidirectional LSTM: embedding -> BiLSTM -> linear projection to
tag scores. Requires torch (``pip install sintakso[neural]``); the tagger
imports this module only when neural tagging is requested.
"""
import logging
import pickle
import random
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Sequence, Tuple

import torch
import torch.nn as nn

from .errors import TagError
from .logging_config import ProgressLogger

logger = logging.getLogger(__name__)

PAD = "<PAD>"
UNK = "<UNK>"
IGNORE_INDEX = -100


class BiLSTMTagger(nn.Module):
    """
    Embedding + bidirectional LSTM + linear output layer.

    Index 0 of the vocabulary is padding, index 1 the unknown word.
    """

    def __init__(self, vocab_size: int, num_tags: int, embedding_dim: int = 64,
                 hidden_dim: int = 128, num_layers: int = 1, dropout: float = 0.1):
        super().__init__()
        self.embedding_dim = embedding_dim
        self.hidden_dim = hidden_dim

        self.embedding = nn.Embedding(vocab_size, embedding_dim, padding_idx=0)
        # Each direction gets half of hidden_dim
        self.lstm = nn.LSTM(
            embedding_dim,
            hidden_dim // 2,
            num_layers=num_layers,
            bidirectional=True,
            batch_first=True,
            dropout=dropout if num_layers > 1 else 0.0,
        )
        self.dropout = nn.Dropout(dropout)
        self.output = nn.Linear(2 * (hidden_dim // 2), num_tags)

    def forward(self, word_ids: torch.Tensor) -> torch.Tensor:
        """
        Args:
            word_ids: (batch, seq_len) vocabulary indices

        Returns:
            (batch, seq_len, num_tags) unnormalized tag scores
        """
        embedded = self.dropout(self.embedding(word_ids))
        encoded, _ = self.lstm(embedded)
        return self.output(self.dropout(encoded))


class NeuralTagger:
    """Trains, runs and persists a BiLSTMTagger."""

    def __init__(self, embedding_dim: int = 64, hidden_dim: int = 128,
                 num_layers: int = 1, dropout: float = 0.1, seed: int = 42):
        self.config = {
            "embedding_dim": embedding_dim,
            "hidden_dim": hidden_dim,
            "num_layers": num_layers,
            "dropout": dropout,
        }
        self.seed = seed
        self.vocabulary: Dict[str, int] = {PAD: 0, UNK: 1}
        self.tags: List[str] = []
        self.model = None
        self.metadata: Dict = {}

    @property
    def trained(self) -> bool:
        return self.model is not None

    def _encode(self, words: Sequence[str]) -> List[int]:
        unknown = self.vocabulary[UNK]
        return [self.vocabulary.get(word.lower(), unknown) for word in words]

    def train(self, data: Iterable[Tuple[Sequence[str], Sequence[str]]],
              epochs: int = 10, lr: float = 0.01, batch_size: int = 16) -> "NeuralTagger":
        """
        Fit the network on (words, tags) sentence pairs.

        Args:
            data: Iterable of (words, tags) pairs of equal length.
            epochs: Passes over the training data.
            lr: Adam learning rate.
            batch_size: Sentences per optimizer step.

        Returns:
            self
        """
        sentences = []
        for words, tags in data:
            if len(words) != len(tags):
                raise TagError(f"Sentence has {len(words)} words but {len(tags)} tags")
            if words:
                sentences.append((list(words), list(tags)))
        if not sentences:
            raise TagError("Cannot train a neural tagger on an empty corpus")

        torch.manual_seed(self.seed)
        shuffler = random.Random(self.seed)

        self.vocabulary = {PAD: 0, UNK: 1}
        for words, _ in sentences:
            for word in words:
                self.vocabulary.setdefault(word.lower(), len(self.vocabulary))
        self.tags = sorted({tag for _, tags in sentences for tag in tags})
        tag_index = {tag: i for i, tag in enumerate(self.tags)}

        self.model = BiLSTMTagger(len(self.vocabulary), len(self.tags), **self.config)
        optimizer = torch.optim.Adam(self.model.parameters(), lr=lr)
        criterion = nn.CrossEntropyLoss(ignore_index=IGNORE_INDEX)

        encoded = [(self._encode(words), [tag_index[tag] for tag in tags]) for words, tags in sentences]
        progress = ProgressLogger(epochs, desc="Training BiLSTM", logger=logger)

        self.model.train()
        for epoch in range(epochs):
            shuffler.shuffle(encoded)
            total_loss = 0.0
            for i in range(0, len(encoded), batch_size):
                word_ids, tag_ids = _pad_batch(encoded[i:i + batch_size])
                optimizer.zero_grad()
                scores = self.model(word_ids)
                loss = criterion(scores.reshape(-1, len(self.tags)), tag_ids.reshape(-1))
                loss.backward()
                torch.nn.utils.clip_grad_norm_(self.model.parameters(), 1.0)
                optimizer.step()
                total_loss += loss.item()
            progress.update(item_desc=f"epoch {epoch + 1} loss={total_loss:.4f}")
        progress.close()
        self.model.eval()

        self.metadata = {
            "trained_at": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            "training_size": len(sentences),
            "num_tags": len(self.tags),
            "vocab_size": len(self.vocabulary),
            "epochs": epochs,
            "learning_rate": lr,
        }
        return self

    def predict(self, words: Sequence[str]) -> List[str]:
        """Tag one sentence. Unknown words map to <UNK>."""
        if not self.trained:
            raise TagError("Neural tagger has not been trained or loaded")
        if not words:
            return []
        self.model.eval()
        with torch.no_grad():
            word_ids = torch.tensor([self._encode(words)], dtype=torch.long)
            best = self.model(word_ids).argmax(dim=-1)[0]
        return [self.tags[i] for i in best.tolist()]

    def save(self, path) -> None:
        """Write a torch checkpoint with weights, config and vocabularies."""
        if not self.trained:
            raise TagError("Cannot save an untrained neural tagger")
        torch.save({
            'model_state_dict': self.model.state_dict(),
            'config': self.config,
            'vocabulary': self.vocabulary,
            'tags': self.tags,
            'metadata': self.metadata,
        }, path)
        logger.info(f"Saved neural tagger to {path}")

    @classmethod
    def load(cls, path) -> "NeuralTagger":
        """
        Load a checkpoint written by :meth:`save`.

        Raises:
            TagError: The checkpoint is missing or malformed.
        """
        try:
            checkpoint = torch.load(path, map_location='cpu', weights_only=True)
            tagger = cls(**checkpoint['config'])
            tagger.vocabulary = dict(checkpoint['vocabulary'])
            tagger.tags = list(checkpoint['tags'])
            tagger.metadata = dict(checkpoint.get('metadata', {}))
            tagger.model = BiLSTMTagger(len(tagger.vocabulary), len(tagger.tags), **tagger.config)
            tagger.model.load_state_dict(checkpoint['model_state_dict'])
        except (OSError, EOFError, RuntimeError, KeyError, TypeError, ValueError, pickle.UnpicklingError) as e:
            raise TagError(f"Cannot load neural tagger from {path}: {e}") from e
        tagger.model.eval()
        logger.debug(f"Loaded neural tagger from {path}")
        return tagger


def _pad_batch(batch: List[Tuple[List[int], List[int]]]) -> Tuple[torch.Tensor, torch.Tensor]:
    words = [torch.tensor(word_ids, dtype=torch.long) for word_ids, _ in batch]
    tags = [torch.tensor(tag_ids, dtype=torch.long) for _, tag_ids in batch]
    word_ids = torch.nn.utils.rnn.pad_sequence(words, batch_first=True, padding_value=0)
    tag_ids = torch.nn.utils.rnn.pad_sequence(tags, batch_first=True, padding_value=IGNORE_INDEX)
    return word_ids, tag_ids
