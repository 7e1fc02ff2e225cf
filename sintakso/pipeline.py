"""
The main processing pipeline for Sintakso.

    text -> Tokenizer -> Tagger -> Morphology -> SentenceParser -> DependencyExtractor

Tokenization and tagging are sequential over the whole text; sentence
parsing and dependency extraction can run per sentence on worker threads.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .dependency_extractor import extract_document
from .languages import get_language
from .morphology import analyze as analyze_morphology
from .nodes import Dependency, Document, Token
from .sentence_parser import parse_document
from .tagger import TagMode, load_hmm_model, load_neural_model, resolve_mode, tag
from .tokenizer import tokenize
from .trace import ExecutionTrace

logger = logging.getLogger(__name__)

STAGES = ("Tokenizer", "Tagger", "Morphology", "SentenceParser", "DependencyExtractor")


@dataclass
class Analysis:
    """Everything the pipeline produces for one text."""
    tokens: List[Token] = field(default_factory=list)
    document: Document = field(default_factory=Document)
    # One list of edges per sentence, in document order
    dependencies: List[List[Dependency]] = field(default_factory=list)

    @property
    def sentences(self):
        return self.document.sentences


class GrammarPipeline:
    """
    Orchestrates the full analysis of a text, from raw string to dependency
    graph, with optional step-by-step tracing.
    """
    def __init__(self, language=None, tag_mode=TagMode.RULE_BASED, hmm_model=None,
                 neural_model=None, workers: Optional[int] = None):
        """
        Initialize the pipeline.

        Args:
            language: Language code ('en', 'es', 'ca') or profile.
            tag_mode: TagMode or its string value.
            hmm_model: HMMTagger instance or path; loaded once here.
            neural_model: NeuralTagger instance or path; loaded once here.
            workers: Threads for per-sentence parsing and extraction.
        """
        self.profile = get_language(language)
        self.language = self.profile.code
        self.tag_mode = resolve_mode(tag_mode)
        self.hmm_model = load_hmm_model(hmm_model) if hmm_model is not None else None
        self.neural_model = load_neural_model(neural_model) if neural_model is not None else None
        self.workers = workers
        logger.info(f"GrammarPipeline initialized ({self.language}, {self.tag_mode.value})")

    @classmethod
    def from_settings(cls, settings) -> "GrammarPipeline":
        return cls(
            language=settings.language,
            tag_mode=settings.tag_mode,
            hmm_model=settings.hmm_model_path,
            neural_model=settings.neural_model_path,
            workers=settings.workers,
        )

    def tokenize(self, text: str) -> List[Token]:
        return tokenize(text, self.profile)

    def tag(self, tokens: List[Token]) -> List[Token]:
        return tag(tokens, self.tag_mode, language=self.profile,
                   hmm_model=self.hmm_model, neural_model=self.neural_model)

    def analyze(self, text: str) -> Analysis:
        """
        Run every stage and return the combined result.

        Raises:
            TokenizeError: The text contains a character no rule can scan.
        """
        tokens = analyze_morphology(self.tag(self.tokenize(text)), self.profile)
        document = parse_document(tokens, self.profile, workers=self.workers)
        dependencies = extract_document(document, workers=self.workers)
        return Analysis(tokens=tokens, document=document, dependencies=dependencies)

    def run(self, text: str, stop_after: str = None) -> ExecutionTrace:
        """
        Runs the pipeline on ``text`` while recording every stage.

        Args:
            text: The raw input text.
            stop_after: If specified, the pipeline will stop after this stage
                (one of STAGES).

        Returns:
            A complete ExecutionTrace. Failures are recorded on the trace, not raised.
        """
        if stop_after is not None and stop_after not in STAGES:
            raise ValueError(f"Unknown stage '{stop_after}'. Choose one of: {', '.join(STAGES)}")

        logger.info(f"Starting pipeline run ({len(text)} characters)")
        trace = ExecutionTrace(initial_text=text, language=self.language)

        try:
            # Step 1: Tokenizer
            logger.info("Step 1: Tokenizer - Scanning text into tokens.")
            tokens = self.tokenize(text)
            trace.add_step(
                "Tokenizer",
                inputs={"text_length": len(text)},
                outputs={"tokens": [token.text for token in tokens]},
                description="Split the text into tokens with exact source spans."
            )
            if stop_after == "Tokenizer": return trace

            # Step 2: Tagger
            logger.info(f"Step 2: Tagger - Assigning part-of-speech tags ({self.tag_mode.value}).")
            tokens = self.tag(tokens)
            trace.add_step(
                "Tagger",
                inputs={"mode": self.tag_mode.value, "token_count": len(tokens)},
                outputs={"tags": [token.pos_tag for token in tokens]},
                description="Assigned a Universal Dependencies tag to every token."
            )
            if stop_after == "Tagger": return trace

            # Step 3: Morphology
            logger.info("Step 3: Morphology - Lemmatizing and extracting features.")
            tokens = analyze_morphology(tokens, self.profile)
            trace.add_step(
                "Morphology",
                inputs={"token_count": len(tokens)},
                outputs={"lemmas": [token.lemma for token in tokens]},
                description="Found lemmas and inflectional features."
            )
            if stop_after == "Morphology": return trace

            # Step 4: Sentence parser
            logger.info("Step 4: SentenceParser - Building phrases, clauses and sentences.")
            document = parse_document(tokens, self.profile, workers=self.workers)
            trace.add_step(
                "SentenceParser",
                inputs={"token_count": len(tokens)},
                outputs={
                    "paragraph_count": len(document.paragraphs),
                    "sentence_count": len(document.sentences),
                    "structures": [sentence.structure.value for sentence in document.sentences],
                },
                description="Parsed the tagged tokens into a document tree."
            )
            if stop_after == "SentenceParser": return trace

            # Step 5: Dependency extractor
            logger.info("Step 5: DependencyExtractor - Extracting dependency edges.")
            dependencies = extract_document(document, workers=self.workers)
            trace.add_step(
                "DependencyExtractor",
                inputs={"sentence_count": len(document.sentences)},
                outputs={"dependencies": [[repr(edge) for edge in edges] for edges in dependencies]},
                description="Flattened each sentence into labeled head-dependent edges."
            )

            logger.info("Pipeline run completed successfully.")
            trace.set_result(Analysis(tokens=tokens, document=document, dependencies=dependencies))

        except Exception as e:
            # Any failure ends up on the trace
            logger.error(f"Pipeline failed with error: {e}", exc_info=True)
            trace.set_error(str(e))

        return trace
