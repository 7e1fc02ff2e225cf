"""
Syntax tree nodes.

Every node is an immutable dataclass. Composite nodes compute their span from
their children when they are built and never recompute it. Stages that need
to change a token (tagging, morphology) create a new one with
``dataclasses.replace``.

Tree shape:
    Document -> Paragraph -> Sentence -> Clause -> NounPhrase / VerbPhrase
    NounPhrase -> PrepositionalPhrase / RelativeClause (post-modifiers)
    VerbPhrase -> NounPhrase / PrepositionalPhrase / Token (complements)
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple, Union

# Universal Dependencies part-of-speech tags
POS_TAGS = frozenset({
    "adj",    # adjective
    "adp",    # adposition
    "adv",    # adverb
    "aux",    # auxiliary
    "cconj",  # coordinating conjunction
    "det",    # determiner
    "intj",   # interjection
    "noun",   # noun
    "num",    # numeral
    "part",   # particle
    "pron",   # pronoun
    "propn",  # proper noun
    "punct",  # punctuation
    "sconj",  # subordinating conjunction
    "sym",    # symbol
    "verb",   # verb
    "x",      # other / not yet resolved
})

UNRESOLVED = "x"
OPEN_CLASS_TAGS = ("noun", "propn", "verb", "adj", "adv")


class Feature(Enum):
    """Morphological feature keys."""
    GENDER = "gender"
    NUMBER = "number"
    TENSE = "tense"
    MOOD = "mood"
    ASPECT = "aspect"
    PERSON = "person"
    DEGREE = "degree"


FEATURE_VALUES = {
    Feature.GENDER: frozenset({"masculine", "feminine", "neuter"}),
    Feature.NUMBER: frozenset({"singular", "plural"}),
    Feature.TENSE: frozenset({"present", "past", "future", "imperfect", "conditional"}),
    Feature.MOOD: frozenset({"indicative", "subjunctive", "conditional", "imperative"}),
    Feature.ASPECT: frozenset({"progressive", "perfective"}),
    Feature.PERSON: frozenset({"first", "second", "third"}),
    Feature.DEGREE: frozenset({"positive", "comparative", "superlative"}),
}


class ClauseType(Enum):
    INDEPENDENT = "independent"
    MAIN = "main"
    SUBORDINATE = "subordinate"
    RELATIVE = "relative"


class RelativeClauseType(Enum):
    RESTRICTIVE = "restrictive"
    NON_RESTRICTIVE = "non_restrictive"


class SentenceFunction(Enum):
    DECLARATIVE = "declarative"
    INTERROGATIVE = "interrogative"
    EXCLAMATIVE = "exclamative"


class SentenceStructure(Enum):
    SIMPLE = "simple"
    COMPOUND = "compound"
    FRAGMENT = "fragment"


@dataclass(frozen=True)
class Span:
    """
    Exact source extent of a node.

    Lines are 1-based, columns are 0-based character columns and offsets are
    UTF-8 byte offsets into the source text.
    """
    start_pos: Tuple[int, int]
    start_offset: int
    end_pos: Tuple[int, int]
    end_offset: int

    def __post_init__(self):
        if self.start_offset > self.end_offset:
            raise ValueError(
                f"Span start {self.start_offset} is after its end {self.end_offset}"
            )

    @classmethod
    def union(cls, *spans: "Span") -> "Span":
        """Smallest span covering every given span."""
        spans = [span for span in spans if span is not None]
        if not spans:
            raise ValueError("Cannot build the union of no spans")
        first = min(spans, key=lambda span: span.start_offset)
        last = max(spans, key=lambda span: span.end_offset)
        return cls(first.start_pos, first.start_offset, last.end_pos, last.end_offset)

    def contains(self, other: "Span") -> bool:
        return self.start_offset <= other.start_offset and other.end_offset <= self.end_offset

    def extract(self, text: str) -> str:
        """Return the substring of ``text`` this span covers."""
        return text.encode("utf-8")[self.start_offset:self.end_offset].decode("utf-8")


EMPTY_SPAN = Span((1, 0), 0, (1, 0), 0)


@dataclass(frozen=True)
class Token:
    """A single scanned unit with its tag, lemma and features."""
    text: str
    span: Span
    pos_tag: str = UNRESOLVED
    lemma: Optional[str] = None
    morphology: Dict[Feature, str] = field(default_factory=dict, hash=False)
    language: str = "en"

    def tokens(self) -> List["Token"]:
        return [self]

    def __repr__(self) -> str:
        return f"Token({self.text!r}, {self.pos_tag}, {self.span.start_offset}:{self.span.end_offset})"


def _ordered_tokens(parts: Iterable) -> List[Token]:
    tokens = []
    for part in parts:
        if part is not None:
            tokens.extend(part.tokens())
    return sorted(tokens, key=lambda token: token.span.start_offset)


def _freeze(node, *names):
    for name in names:
        object.__setattr__(node, name, tuple(getattr(node, name)))


def _settle_span(node, parts):
    if node.span is None:
        object.__setattr__(node, "span", Span.union(*(p.span for p in parts if p is not None)))


@dataclass(frozen=True)
class NounPhrase:
    head: Token
    determiner: Optional[Token] = None
    modifiers: Tuple[Token, ...] = ()
    post_modifiers: Tuple["PostModifier", ...] = ()
    language: str = "en"
    span: Optional[Span] = None

    def __post_init__(self):
        _freeze(self, "modifiers", "post_modifiers")
        _settle_span(self, self._parts())

    def _parts(self):
        return [self.determiner, *self.modifiers, self.head, *self.post_modifiers]

    def tokens(self) -> List[Token]:
        return _ordered_tokens(self._parts())


@dataclass(frozen=True)
class PrepositionalPhrase:
    head: Token
    object: NounPhrase
    language: str = "en"
    span: Optional[Span] = None

    def __post_init__(self):
        _settle_span(self, [self.head, self.object])

    def tokens(self) -> List[Token]:
        return _ordered_tokens([self.head, self.object])


@dataclass(frozen=True)
class VerbPhrase:
    head: Token
    auxiliaries: Tuple[Token, ...] = ()
    complements: Tuple["Complement", ...] = ()
    language: str = "en"
    span: Optional[Span] = None

    def __post_init__(self):
        _freeze(self, "auxiliaries", "complements")
        _settle_span(self, self._parts())

    def _parts(self):
        return [*self.auxiliaries, self.head, *self.complements]

    def tokens(self) -> List[Token]:
        return _ordered_tokens(self._parts())


@dataclass(frozen=True)
class Clause:
    predicate: VerbPhrase
    type: ClauseType = ClauseType.INDEPENDENT
    subject: Optional[NounPhrase] = None
    subordinator: Optional[Token] = None
    language: str = "en"
    span: Optional[Span] = None

    def __post_init__(self):
        _settle_span(self, self._parts())

    def _parts(self):
        return [self.subordinator, self.subject, self.predicate]

    def tokens(self) -> List[Token]:
        return _ordered_tokens(self._parts())


@dataclass(frozen=True)
class RelativeClause:
    relativizer: Token
    clause: Clause
    type: RelativeClauseType = RelativeClauseType.RESTRICTIVE
    span: Optional[Span] = None

    def __post_init__(self):
        _settle_span(self, [self.relativizer, self.clause])

    def tokens(self) -> List[Token]:
        return _ordered_tokens([self.relativizer, self.clause])


PostModifier = Union[PrepositionalPhrase, RelativeClause]
Complement = Union[NounPhrase, PrepositionalPhrase, Token]


@dataclass(frozen=True)
class Sentence:
    function: SentenceFunction
    structure: SentenceStructure
    main_clause: Optional[Clause] = None
    additional_clauses: Tuple[Clause, ...] = ()
    language: str = "en"
    span: Optional[Span] = None

    def __post_init__(self):
        _freeze(self, "additional_clauses")
        if (self.structure is SentenceStructure.COMPOUND) != bool(self.additional_clauses):
            raise ValueError("A sentence is compound exactly when it has additional clauses")
        _settle_span(self, self.clauses())

    def clauses(self) -> List[Clause]:
        """Main clause followed by the additional clauses."""
        main = [self.main_clause] if self.main_clause is not None else []
        return main + list(self.additional_clauses)

    def tokens(self) -> List[Token]:
        return _ordered_tokens(self.clauses())


@dataclass(frozen=True)
class Paragraph:
    sentences: Tuple[Sentence, ...]
    language: str = "en"
    span: Optional[Span] = None

    def __post_init__(self):
        _freeze(self, "sentences")
        _settle_span(self, self.sentences)


@dataclass(frozen=True)
class Document:
    paragraphs: Tuple[Paragraph, ...] = ()
    language: str = "en"
    metadata: Dict[str, int] = field(default_factory=dict, hash=False)
    span: Optional[Span] = None

    def __post_init__(self):
        _freeze(self, "paragraphs")
        if self.span is None:
            object.__setattr__(
                self, "span",
                Span.union(*(p.span for p in self.paragraphs)) if self.paragraphs else EMPTY_SPAN
            )

    @property
    def sentences(self) -> List[Sentence]:
        return [sentence for paragraph in self.paragraphs for sentence in paragraph.sentences]


@dataclass(frozen=True)
class Dependency:
    """A labeled head -> dependent edge between two tokens of the tree."""
    relation: str
    head: Token
    dependent: Token
    span: Optional[Span] = None

    def __post_init__(self):
        _settle_span(self, [self.head, self.dependent])

    def __repr__(self) -> str:
        return f"{self.relation}({self.head.text}, {self.dependent.text})"
