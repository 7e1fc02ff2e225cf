"""
English rule tables.

Closed-class word lists, context rules, suffix banks and lemmatization
tables for English. The lexicon categories are listed in priority order:
a word that belongs to several lists (``that``, ``for``, ``so``) takes the tag
of the first one.
"""
from ..nodes import Feature
from ..rules import (
    LemmaRule, always, capitalized, inflected, suffix, uninflected, word_in,
)
from .profile import (
    APOSTROPHE, LanguageProfile, NOT_LETTER, NUMBER, PUNCTUATION, WORD,
)

# ============================================================================
# Token patterns
# ============================================================================

TOKEN_PATTERNS = [
    ("contraction", rf"{WORD}{APOSTROPHE}(?i:t|s|m|re|ve|ll|d){NOT_LETTER}"),  # don't, it's, we're
    ("hyphenated", rf"{WORD}(?:-{WORD})+"),                                   # well-known
    ("number", NUMBER),
    ("word", WORD),
    ("punct", PUNCTUATION),
]

# ============================================================================
# Closed-class lexicon
# ============================================================================

DETERMINERS = {
    "the", "a", "an", "this", "that", "these", "those",
    "my", "your", "his", "her", "its", "our", "their",
    "some", "any", "no", "every", "each", "either", "neither",
    "much", "many", "more", "most", "less", "least", "few", "several", "all", "both", "half",
    "whose",
}

PRONOUNS = {
    "i", "me", "mine", "myself",
    "you", "yours", "yourself", "yourselves",
    "he", "him", "himself",
    "she", "hers", "herself",
    "it", "itself",
    "we", "us", "ours", "ourselves",
    "they", "them", "theirs", "themselves",
    "who", "whom", "which", "what",
    "someone", "somebody", "something", "anyone", "anybody", "anything",
    "everyone", "everybody", "everything", "nobody", "nothing",
}

PREPOSITIONS = {
    "in", "on", "at", "by", "for", "with", "from", "to", "of", "about",
    "above", "across", "after", "against", "along", "among", "around",
    "before", "behind", "below", "beneath", "beside", "between", "beyond",
    "down", "during", "except", "inside", "into", "like", "near",
    "off", "over", "past", "since", "through", "throughout", "till",
    "toward", "towards", "under", "underneath", "until", "up", "upon", "within", "without",
}

COORDINATING_CONJUNCTIONS = {"and", "or", "but", "nor", "yet", "so", "for"}

SUBORDINATING_CONJUNCTIONS = {
    "after", "although", "as", "because", "before", "if", "once", "since",
    "than", "that", "though", "till", "unless", "until", "when", "whenever",
    "where", "wherever", "whether", "while",
}

AUXILIARIES = {
    "am", "is", "are", "was", "were", "be", "been", "being",
    "have", "has", "had", "having",
    "do", "does", "did", "doing",
    "will", "would", "shall", "should", "may", "might",
    "can", "could", "must", "ought",
}

COMMON_VERBS = """
    go went gone going goes
    come came coming comes
    see saw seen seeing sees
    get got gotten getting gets
    make made making makes
    know knew known knowing knows
    think thought thinking thinks
    take took taken taking takes
    find found finding finds
    give gave given giving gives
    tell told telling tells
    say said saying says
    work worked working works
    call called calling calls
    try tried trying tries
    ask asked asking asks
    need needed needing needs
    feel felt feeling feels
    become became becoming becomes
    leave left leaving leaves
    put putting puts
    mean meant meaning means
    keep kept keeping keeps
    let letting lets
    begin began begun beginning begins
    seem seemed seeming seems
    help helped helping helps
    show showed shown showing shows
    hear heard hearing hears
    play played playing plays
    run ran running runs
    move moved moving moves
    like liked liking likes
    live lived living lives
    love loved loving loves
    believe believed believing believes
    bring brought bringing brings
    happen happened happening happens
    write wrote written writing writes
    sit sat sitting sits
    stand stood standing stands
    lose lost losing loses
    pay paid paying pays
    meet met meeting meets
    include included including includes
    continue continued continuing continues
    set setting sets
    learn learned learning learns
    change changed changing changes
    lead led leading leads
    understand understood understanding understands
    watch watched watching watches
    follow followed following follows
    stop stopped stopping stops
    create created creating creates
    speak spoke spoken speaking speaks
    read reading reads
    spend spent spending spends
    grow grew grown growing grows
    open opened opening opens
    walk walked walking walks
    win won winning wins
    teach taught teaching teaches
    offer offered offering offers
    remember remembered remembering remembers
    consider considered considering considers
    appear appeared appearing appears
    buy bought buying buys
    serve served serving serves
    die died dying dies
    send sent sending sends
    build built building builds
    stay stayed staying stays
    fall fell fallen falling falls
    cut cutting cuts
    reach reached reaching reaches
    kill killed killing kills
    raise raised raising raises
    pass passed passing passes
    sell sold selling sells
    decide decided deciding decides
    return returned returning returns
    explain explained explaining explains
    hope hoped hoping hopes
    develop developed developing develops
    carry carried carrying carries
    break broke broken breaking breaks
    receive received receiving receives
    agree agreed agreeing agrees
    support supported supporting supports
    hit hitting hits
    produce produced producing produces
    eat ate eaten eating eats
    cover covered covering covers
    catch caught catching catches
    draw drew drawn drawing draws
    sleep slept sleeping sleeps
    chase chased chasing chases
    bark barked barking barks
    jump jumped jumping jumps
""".split()

COMMON_ADJECTIVES = """
    good bad big small large little
    new old young long short
    high low great right
    different same next last
    early late public important
    able free real sure
    certain wrong ready clear
    white black red blue green yellow brown gray grey
    hot cold happy sad
    easy hard strong weak
    full empty rich poor
    heavy fast slow
    clean dirty safe dangerous
    cheap expensive quiet loud
    wide narrow deep shallow
    thick thin bright dark
    soft smooth rough
    wet dry simple complex
    common rare perfect terrible
    beautiful ugly wonderful awful
    excellent fine nice lazy quick
    popular famous special normal
    main central natural human
    social economic political legal
    international national local private
    general particular individual specific
    recent modern current
    future present possible
    likely similar various
    additional extra available
    necessary essential serious
    major minor primary secondary
    positive negative active passive
    direct indirect wild calm
    brief enormous tiny
    huge massive grand tall
""".split()

ADVERBS = {
    "not", "very", "really", "quite", "rather", "too", "so", "enough",
    "always", "never", "often", "sometimes", "usually", "rarely", "seldom",
    "already", "yet", "still", "just", "now", "then", "soon",
    "here", "there", "everywhere", "nowhere", "anywhere", "somewhere",
    "how", "why", "when", "where",
    "indeed", "perhaps", "maybe", "probably", "possibly", "certainly",
    "however", "therefore", "moreover", "furthermore", "nevertheless", "nonetheless",
    "today", "tomorrow", "yesterday", "again", "also", "away", "back",
}

PARTICLES = {"to", "up", "down", "out", "off", "in", "on", "away", "back"}

INTERJECTIONS = {
    "ah", "oh", "wow", "hey", "hi", "hello", "goodbye", "yes", "no", "thanks", "please",
    "ouch", "oops", "ugh", "hmm", "huh",
}

LEXICON_CATEGORIES = [
    ("det", DETERMINERS),
    ("pron", PRONOUNS),
    ("adp", PREPOSITIONS),
    ("cconj", COORDINATING_CONJUNCTIONS),
    ("sconj", SUBORDINATING_CONJUNCTIONS),
    ("aux", AUXILIARIES),
    ("verb", COMMON_VERBS),
    ("adj", COMMON_ADJECTIVES),
    ("adv", ADVERBS),
    ("part", PARTICLES),
    ("intj", INTERJECTIONS),
]

SUBJECT_PRONOUNS = frozenset({"i", "you", "he", "she", "it", "we", "they"})
OBJECT_PRONOUNS = frozenset({"me", "him", "her", "us", "them", "it", "you"})
MODALS = frozenset({"will", "would", "shall", "should", "may", "might", "can", "could", "must", "do", "does", "did"})

ADJECTIVAL = suffix("ful", "less", "ous", "ive", "able", "ible")
ADVERBIAL = suffix("ly", min_length=4)
VERBAL = suffix("ing", "ed", "en", min_length=4)

# ============================================================================
# Context rules: (token, previous tagged token, next raw token, profile)
# ============================================================================


def after_determiner(token, previous, following, profile):
    """A word after a determiner is a noun unless it looks adjectival."""
    if previous is not None and previous.pos_tag == "det":
        return "adj" if ADJECTIVAL(token.text) else "noun"
    return None


def after_adposition(token, previous, following, profile):
    if previous is not None and previous.pos_tag == "adp" and not token.text[0].isupper():
        return "adj" if ADJECTIVAL(token.text) else "noun"
    return None


def after_adjective(token, previous, following, profile):
    if previous is not None and previous.pos_tag == "adj" and not token.text[0].isupper():
        if ADVERBIAL(token.text):
            return None
        return "adj" if ADJECTIVAL(token.text) else "noun"
    return None


def after_auxiliary(token, previous, following, profile):
    """Participles and bare forms after an auxiliary are verbs."""
    if previous is None or previous.pos_tag != "aux":
        return None
    if ADJECTIVAL(token.text):
        return "adj"
    if VERBAL(token.text) or previous.text.lower() in MODALS:
        return "verb"
    return None


def after_subject_pronoun(token, previous, following, profile):
    if (previous is not None and previous.pos_tag == "pron"
            and previous.text.lower() in SUBJECT_PRONOUNS and not ADVERBIAL(token.text)):
        return "verb"
    return None


def before_object(token, previous, following, profile):
    """After a nominal, a word followed by a determiner, object pronoun or name is a verb."""
    if previous is None or previous.pos_tag not in ("noun", "propn", "pron") or following is None:
        return None
    if token.text[0].isupper():
        return None
    next_word = following.text.lower()
    if profile.lookup(next_word) == "det" or next_word in OBJECT_PRONOUNS or following.text[0].isupper():
        return "verb"
    return None


def clause_final_verb(token, previous, following, profile):
    """After a noun, an -s or -ed word closing the clause is a verb."""
    if previous is None or previous.pos_tag not in ("noun", "propn"):
        return None
    word = token.text.lower()
    if not word.endswith(("s", "ed")) or word.endswith("ss"):
        return None
    if (following is None or following.pos_tag == "punct"
            or profile.lookup(following.text) in ("adp", "adv", "sconj", "cconj")
            or ADVERBIAL(following.text)):
        return "verb"
    return None


CONTEXT_RULES = [
    after_determiner,
    after_adposition,
    after_adjective,
    after_auxiliary,
    after_subject_pronoun,
    before_object,
    clause_final_verb,
]

# ============================================================================
# Morphological rule bank (checked in order)
# ============================================================================

MORPHOLOGICAL_RULES = [
    (suffix("tion", "sion", "ment", "ness", "ity", "ism"), "noun"),
    (ADVERBIAL, "adv"),
    (suffix("ing", min_length=5), "verb"),
    (suffix("ed", min_length=4), "verb"),
    (ADJECTIVAL, "adj"),
    (capitalized(), "propn"),
    (suffix("er", "or", min_length=4), "noun"),
    (suffix("ist"), "noun"),
]

# ============================================================================
# Lemmatization
# ============================================================================

# Irregular past tense forms
PAST_FORMS = {
    "was": "be", "were": "be", "had": "have", "did": "do", "went": "go",
    "came": "come", "saw": "see", "got": "get", "made": "make", "knew": "know",
    "thought": "think", "took": "take", "found": "find", "gave": "give",
    "told": "tell", "said": "say", "felt": "feel", "became": "become",
    "left": "leave", "meant": "mean", "kept": "keep", "began": "begin",
    "heard": "hear", "ran": "run", "brought": "bring", "wrote": "write",
    "sat": "sit", "stood": "stand", "lost": "lose", "paid": "pay",
    "met": "meet", "led": "lead", "understood": "understand", "spoke": "speak",
    "spent": "spend", "grew": "grow", "won": "win", "taught": "teach",
    "bought": "buy", "sent": "send", "built": "build", "fell": "fall",
    "sold": "sell", "broke": "break", "ate": "eat", "caught": "catch",
    "drew": "draw", "slept": "sleep", "flew": "fly", "swam": "swim",
    "drove": "drive", "sang": "sing", "drank": "drink", "could": "can",
    "should": "shall", "might": "may", "would": "will",
}

# Irregular past participles
PARTICIPLE_FORMS = {
    "been": "be", "done": "do", "gone": "go", "seen": "see", "gotten": "get",
    "known": "know", "taken": "take", "given": "give", "begun": "begin",
    "written": "write", "spoken": "speak", "grown": "grow", "fallen": "fall",
    "broken": "break", "eaten": "eat", "drawn": "draw", "flown": "fly",
    "swum": "swim", "driven": "drive", "sung": "sing", "drunk": "drink",
    "shown": "show",
}

PRESENT_FORMS = {
    "am": "be", "is": "be", "are": "be", "being": "be",
    "has": "have", "having": "have",
    "does": "do", "doing": "do", "goes": "go",
}

IRREGULAR_NOUNS = {
    "children": "child", "men": "man", "women": "woman", "people": "person",
    "mice": "mouse", "feet": "foot", "teeth": "tooth", "geese": "goose",
    "oxen": "ox", "lives": "life", "wives": "wife", "knives": "knife",
}

IRREGULAR_ADJECTIVES = {
    "better": "good", "best": "good", "worse": "bad", "worst": "bad",
    "farther": "far", "further": "far", "farthest": "far", "furthest": "far",
    "less": "little", "least": "little", "more": "many", "most": "many",
}


def _irregular_table():
    table = {}
    for forms in (PAST_FORMS, PARTICIPLE_FORMS, PRESENT_FORMS):
        for form, lemma in forms.items():
            table[(form, "verb")] = lemma
            table[(form, "aux")] = lemma
    table.update({(form, "noun"): lemma for form, lemma in IRREGULAR_NOUNS.items()})
    table.update({(form, "adj"): lemma for form, lemma in IRREGULAR_ADJECTIVES.items()})
    return table


# Stem endings that take back a silent 'e' (making -> make)
SILENT_E_STEMS = ("c", "g", "v", "iz", "ur", "ak", "ik", "uk")

VERB_LEMMA_RULES = [
    LemmaRule("ies", "y", min_length=5),
    LemmaRule("ied", "y", min_length=5),
    LemmaRule("ing", "", min_length=5, undouble=True, restore_e=SILENT_E_STEMS),
    LemmaRule("ed", "", min_length=4, undouble=True, restore_e=SILENT_E_STEMS),
    LemmaRule("sses", "ss"),
    LemmaRule("ches", "ch"),
    LemmaRule("shes", "sh"),
    LemmaRule("xes", "x"),
    LemmaRule("oes", "o"),
    LemmaRule("ss", "ss"),
    LemmaRule("s", "", min_length=3),
]

LEMMA_RULES = {
    "verb": VERB_LEMMA_RULES,
    "aux": VERB_LEMMA_RULES,
    "noun": [
        LemmaRule("ies", "y", min_length=5),
        LemmaRule("sses", "ss"),
        LemmaRule("ches", "ch"),
        LemmaRule("shes", "sh"),
        LemmaRule("xes", "x"),
        LemmaRule("ss", "ss"),
        LemmaRule("us", "us"),
        LemmaRule("is", "is"),
        LemmaRule("s", "", min_length=3),
    ],
    "adj": [
        LemmaRule("iest", "y", min_length=5),
        LemmaRule("ier", "y", min_length=4),
        LemmaRule("est", "", min_length=5, undouble=True, restore_e=("g", "c", "s", "v")),
        LemmaRule("er", "", min_length=5, undouble=True, restore_e=("g", "c", "s", "v")),
    ],
}

# ============================================================================
# Feature extraction
# ============================================================================


def _past(word, lemma):
    return word in PAST_FORMS or (word.endswith("ed") and word != lemma)


def _participle(word, lemma):
    return word in PARTICIPLE_FORMS


def _progressive(word, lemma):
    return word.endswith("ing") and word != lemma


def _third_singular(word, lemma):
    return word in ("is", "has", "does") or (word.endswith("s") and word != lemma)


def _comparative(word, lemma):
    return word != lemma and (word.endswith("er") or word in ("better", "worse", "farther", "further", "less", "more"))


def _superlative(word, lemma):
    return word != lemma and (word.endswith("est") or word in ("best", "worst", "least", "most"))


VERB_FEATURES = [
    (_participle, {Feature.TENSE: "past", Feature.ASPECT: "perfective"}),
    (_past, {Feature.TENSE: "past", Feature.MOOD: "indicative"}),
    (_progressive, {Feature.TENSE: "present", Feature.ASPECT: "progressive"}),
    (word_in({"am"}), {Feature.PERSON: "first", Feature.NUMBER: "singular"}),
    (_third_singular, {Feature.TENSE: "present", Feature.PERSON: "third", Feature.NUMBER: "singular"}),
    (always, {Feature.TENSE: "present", Feature.MOOD: "indicative"}),
]

FEATURE_RULES = {
    "verb": VERB_FEATURES,
    "aux": VERB_FEATURES,
    "noun": [
        (inflected, {Feature.NUMBER: "plural"}),
        (uninflected, {Feature.NUMBER: "singular"}),
    ],
    "adj": [
        (_superlative, {Feature.DEGREE: "superlative"}),
        (_comparative, {Feature.DEGREE: "comparative"}),
        (always, {Feature.DEGREE: "positive"}),
    ],
    "pron": [
        (word_in({"i", "me", "myself", "mine"}), {Feature.PERSON: "first", Feature.NUMBER: "singular"}),
        (word_in({"we", "us", "ourselves", "ours"}), {Feature.PERSON: "first", Feature.NUMBER: "plural"}),
        (word_in({"you", "yours", "yourself", "yourselves"}), {Feature.PERSON: "second"}),
        (word_in({"he", "him", "himself"}), {Feature.PERSON: "third", Feature.NUMBER: "singular", Feature.GENDER: "masculine"}),
        (word_in({"she", "hers", "herself"}), {Feature.PERSON: "third", Feature.NUMBER: "singular", Feature.GENDER: "feminine"}),
        (word_in({"it", "itself"}), {Feature.PERSON: "third", Feature.NUMBER: "singular", Feature.GENDER: "neuter"}),
        (word_in({"they", "them", "themselves", "theirs"}), {Feature.PERSON: "third", Feature.NUMBER: "plural"}),
    ],
}

PROFILE = LanguageProfile(
    code="en",
    name="English",
    token_patterns=TOKEN_PATTERNS,
    lexicon_categories=LEXICON_CATEGORIES,
    context_rules=CONTEXT_RULES,
    morphological_rules=MORPHOLOGICAL_RULES,
    irregular_lemmas=_irregular_table(),
    lemma_rules=LEMMA_RULES,
    feature_rules=FEATURE_RULES,
    articles=frozenset({"the", "a", "an"}),
    relativizers=frozenset({"who", "whom", "whose", "which", "that"}),
    adverbial_relativizers=frozenset({"where", "when", "why"}),
    non_restrictive_relativizers=frozenset({"who", "whom", "whose", "which"}),
)
