"""
Catalan rule tables.

Catalan-specific surface features:
- Elided articles and prepositions (l'home, d'aigua) split after the apostrophe
- Interpunct words (col·laborar, intel·ligent) kept as one token
- Contractions del, dels, al, als, pel, pels
"""
from ..nodes import Feature
from ..rules import LemmaRule, always, capitalized, ends_like, suffix
from .profile import (
    APOSTROPHE, LETTER, LanguageProfile, NOT_LETTER, NUMBER, PUNCTUATION, WORD,
)

# ============================================================================
# Token patterns
# ============================================================================

TOKEN_PATTERNS = [
    ("elision", rf"(?i:[ldsnmt]){APOSTROPHE}(?={LETTER})"),      # l', d', s'
    ("contraction", rf"(?i:dels|del|als|al|pels|pel){NOT_LETTER}"),
    ("interpunct", rf"{WORD}·{WORD}"),                            # col·labora
    ("hyphenated", rf"{WORD}(?:-{WORD})+"),                       # menja-ho
    ("number", NUMBER),
    ("word", WORD),
    ("punct", r"[¿¡«»‹›€]"),
    ("punct", PUNCTUATION),
]

# ============================================================================
# Closed-class lexicon
# ============================================================================

ARTICLES = {"el", "la", "els", "les", "l'", "un", "una", "uns", "unes"}

PRONOUNS = """
    jo em mi
    tu et ti
    ell ella es se si
    nosaltres ens
    vosaltres us
    ells elles
    lo los
    això allò açò
    aquest aquesta aquests aquestes
    aquell aquella aquells aquelles
    qui quin quina quins quines que
    algú alguna alguns algunes
    res ningú cap
    tot tota tots totes
    hi ho
""".split()

PREPOSITIONS = """
    a amb contra de des durant en entre fins
    per sense sobre vers mitjançant
    del dels al als pel pels
    d' s' n' m' t'
""".split()

COORDINATING_CONJUNCTIONS = {"i", "o", "però", "mas", "ni", "u"}

SUBORDINATING_CONJUNCTIONS = {
    "que", "com", "quan", "on", "si", "perquè", "encara", "mentre",
    "així", "doncs", "puix", "ja",
}

AUXILIARIES = """
    ser sóc ets és som sou són
    era eres érem éreu eren
    fui fou fórem fóreu foren
    seré seràs serà serem sereu seran
    seria series seríem seríeu serien
    sigui siguis siguem sigueu siguin
    fos fossis fóssim fóssiu fossin
    estat essent
    estar estic estàs està estem esteu estan
    estava estaves estàvem estàveu estaven
    estaré estaràs estarà estarem estareu estaran
    estaria estaries estaríem estaríeu estarien
    estigui estiguis estiguem estigueu estiguin
    estant
    haver he has ha hem heu han
    havia havies havíem havíeu havien
    hauré hauràs haurà haurem haureu hauran
    hauria hauries hauríem hauríeu haurien
    hagi hagis hàgim hàgiu hagin
    hagut havent
""".split()

COMMON_VERBS = """
    anar vaig vas va anem aneu van anava
    fer faig fas fa fem feu fan
    dir dic dius diu diem dieu diuen
    poder puc pots pot podem podeu poden
    voler vull vols vol volem voleu volen
    veure veig veus veu veiem veieu veuen
    donar dono dones dona donem doneu donen
    saber sé saps sap sabem sabeu saben
    tenir tinc tens té tenim teniu tenen
    venir vinc véns ve venim veniu vénen
    posar poso poses posa posem poseu posen
    sortir surto surts surt sortim sortiu surten
    arribar arribo arribes arriba arribem arribeu arriben
    passar passo passes passa passem passeu passen
    treballar treballo treballes treballa treballem treballeu treballen
    viure visc vius viu vivim viviu viuen
    menjar menjo menges menja mengem mengeu mengen
    beure bec beus beu bevem beveu beuen
    parlar parlo parles parla parlem parleu parlen
    dormir dormo dorms dorm dormim dormiu dormen
""".split()

COMMON_NOUNS = """
    gat gata gats gates gos gossa gossos gosses
    casa cases taula taules cadira cadires llibre llibres
    dia dies setmana setmanes mes mesos any anys
    home homes dona dones nen nena nens nenes
    ciutat ciutats país països món móns
    aigua aigües terra terres foc focs aire aires
    cotxe cotxes tren trens avió avions
    menjars beguda begudes
    treball treballs escola escoles universitat universitats
    família famílies amic amiga amics amigues
    mà mans peu peus caps ull ulls
    vida vides mort morts temps
    mercat mercats parc parcs carrer carrers
""".split()

COMMON_ADJECTIVES = """
    bo bona bons bones dolent dolenta dolents dolentes
    gran grans petit petita petits petites
    nou nova nous noves vell vella vells velles
    jove joves millor millors pitjor pitjors
    molt molta molts moltes poc poca pocs poques
    altre altra altres mateix mateixa mateixos mateixes
    algun
    propi pròpia propis pròpies últim última últims últimes
    primer primera primers primeres
    segon segona segons segones
    tercer tercera tercers terceres
    blanc blanca blancs blanques negre negra negres
""".split()

ADVERBS = """
    sí no bé mal
    aquí allà allí ara després abans llavors
    sempre mai
    també tampoc
    més menys
    gairebé només
    potser
""".split()

PARTICLES = {"no", "sí"}

INTERJECTIONS = {"ah", "oh", "eh", "hola", "adéu", "ai", "uf"}

LEXICON_CATEGORIES = [
    ("det", ARTICLES),
    ("pron", PRONOUNS),
    ("adp", PREPOSITIONS),
    ("cconj", COORDINATING_CONJUNCTIONS),
    ("aux", AUXILIARIES),
    ("verb", COMMON_VERBS),
    ("sconj", SUBORDINATING_CONJUNCTIONS),
    ("noun", COMMON_NOUNS),
    ("adj", COMMON_ADJECTIVES),
    ("adv", ADVERBS),
    ("part", PARTICLES),
    ("intj", INTERJECTIONS),
]

QUANTIFIER_ADJECTIVES = frozenset("""
    molt molta molts moltes poc poca pocs poques
    algun alguna alguns algunes cap
    tot tota tots totes altre altra altres
    bon primer primera
""".split())

SUBJECT_PRONOUNS = frozenset({"jo", "tu", "ell", "ella", "nosaltres", "vosaltres", "ells", "elles"})

ADJECTIVAL = suffix("ós", "osa", "iu", "iva", "able", "ible", "ant", "ent")

# ============================================================================
# Context rules
# ============================================================================


def after_determiner(token, previous, following, profile):
    if previous is not None and previous.pos_tag == "det":
        return "adj" if ADJECTIVAL(token.text) else "noun"
    return None


def after_noun(token, previous, following, profile):
    if previous is not None and previous.pos_tag == "noun" and ADJECTIVAL(token.text):
        return "adj"
    return None


def after_adposition(token, previous, following, profile):
    if previous is not None and previous.pos_tag == "adp" and not token.text[0].isupper():
        return "noun"
    return None


def after_subject(token, previous, following, profile):
    if previous is None:
        return None
    word = previous.text.lower()
    if word == "no" or (previous.pos_tag == "pron" and word in SUBJECT_PRONOUNS):
        return "verb"
    return None


CONTEXT_RULES = [
    after_determiner,
    after_noun,
    after_adposition,
    after_subject,
]

# ============================================================================
# Morphological rule bank
# ============================================================================

MORPHOLOGICAL_RULES = [
    (suffix("ment", min_length=7), "adv"),
    (suffix("ció", "sió", "dat", "tat", "ància", "ència", "isme", "ista"), "noun"),
    (suffix("ment", min_length=6), "noun"),
    (suffix("ós", "osa", "iva", "able", "ible"), "adj"),
    (suffix("iu", min_length=4), "adj"),
    (capitalized(), "propn"),
    (suffix("ria", "ries", "ríem", "ríeu", "rien"), "verb"),                   # conditional
    (suffix("ava", "aves", "àvem", "àveu", "aven"), "verb"),                   # imperfect -ar
    (suffix("íem", "íeu"), "verb"),
    (suffix("ia", min_length=4), "verb"),
    (suffix("ies", "ien", min_length=5), "verb"),
    (suffix("ré", "ràs", "rà"), "verb"),                                      # future
    (suffix("rem", "reu", "ran", min_length=5), "verb"),
    (suffix("àrem", "àreu", "aren", "ares", "à"), "verb"),                    # preterite
    (suffix("í", min_length=3), "verb"),
    (suffix("eixo", "eixes", "eix"), "verb"),
    (suffix("ant", "ent", min_length=5), "verb"),                             # gerund
    (suffix("int"), "verb"),
    (suffix("at", "ut", "it", min_length=5), "verb"),                         # participle
    (suffix("o", min_length=4), "verb"),
    (suffix("es", min_length=5), "verb"),
    (suffix("a", min_length=5), "verb"),
    (suffix("em", "eu", "en", "im", min_length=4), "verb"),
    (suffix("m", min_length=4), "verb"),
]

# ============================================================================
# Lemmatization
# ============================================================================

IRREGULAR_VERBS = {
    "ser": "sóc ets és som sou són era eres érem éreu eren fui fou fórem fóreu foren essent sigui siguin",
    "estar": "estic estàs està estem esteu estan estava estaves estàvem estàveu estaven estat estant",
    "haver": "he has ha hem heu han havia havies havíem havíeu havien hagut havent hagi",
    "anar": "vaig vas va anem aneu van anava",
    "fer": "faig fas fa fem feu fan fet fent",
    "dir": "dic dius diu diem dieu diuen dit dient",
    "poder": "puc pots pot podem podeu poden pogut podent",
    "voler": "vull vols vol volem voleu volen volgut volent",
    "veure": "veig veus veu veiem veieu veuen vist veient",
    "tenir": "tinc tens té tenim teniu tenen tingut tenint",
    "venir": "vinc véns ve venim veniu vénen vingut venint",
    "saber": "sé saps sap sabem sabeu saben sabut sabent",
    "viure": "visc vius viu vivim viviu viuen viscut vivint",
    "beure": "bec beus beu bevem beveu beuen begut bevent",
    "sortir": "surto surts surt surten",
    "dormir": "dorm dorms",
}

IRREGULAR_NOUNS = {"països": "país", "mans": "mà", "mesos": "mes", "aigües": "aigua", "móns": "món"}

IRREGULAR_ADJECTIVES = {
    "bona": "bo", "bones": "bo", "bons": "bo",
    "nova": "nou", "noves": "nou", "nous": "nou",
    "millor": "bo", "millors": "bo", "pitjor": "dolent", "pitjors": "dolent",
    "pròpia": "propi", "pròpies": "propi",
}


def _irregular_table():
    table = {}
    for lemma, forms in IRREGULAR_VERBS.items():
        for form in forms.split():
            table[(form, "verb")] = lemma
            table[(form, "aux")] = lemma
    table.update({(form, "noun"): lemma for form, lemma in IRREGULAR_NOUNS.items()})
    table.update({(form, "adj"): lemma for form, lemma in IRREGULAR_ADJECTIVES.items()})
    return table


VERB_LEMMA_RULES = [
    LemmaRule("ar", "ar"),
    LemmaRule("re", "re"),
    LemmaRule("ir", "ir"),
    LemmaRule("ant", "ar", min_length=5),
    LemmaRule("ent", "re", min_length=5),
    LemmaRule("int", "ir", min_length=5),
    LemmaRule("at", "ar", min_length=4),
    LemmaRule("ut", "re", min_length=4),
    LemmaRule("it", "ir", min_length=4),
    LemmaRule("aríem", "ar"),
    LemmaRule("aríeu", "ar"),
    LemmaRule("arien", "ar"),
    LemmaRule("aries", "ar"),
    LemmaRule("aria", "ar"),
    LemmaRule("àvem", "ar"),
    LemmaRule("àveu", "ar"),
    LemmaRule("aven", "ar"),
    LemmaRule("aves", "ar"),
    LemmaRule("ava", "ar"),
    LemmaRule("íem", "re"),
    LemmaRule("íeu", "re"),
    LemmaRule("ien", "re", min_length=5),
    LemmaRule("ies", "re", min_length=5),
    LemmaRule("ia", "re", min_length=4),
    LemmaRule("aràs", "ar"),
    LemmaRule("arà", "ar"),
    LemmaRule("aré", "ar"),
    LemmaRule("àrem", "ar"),
    LemmaRule("àreu", "ar"),
    LemmaRule("aren", "ar"),
    LemmaRule("ares", "ar"),
    LemmaRule("eixo", "ir"),
    LemmaRule("eixes", "ir"),
    LemmaRule("eix", "ir"),
    LemmaRule("eixen", "ir"),
    LemmaRule("im", "ir", min_length=5),
    LemmaRule("iu", "ir", min_length=5),
    LemmaRule("à", "ar", min_length=3),
    LemmaRule("í", "ar", min_length=3),
    LemmaRule("o", "ar", min_length=3),
    LemmaRule("es", "ar", min_length=4),
    LemmaRule("em", "ar", min_length=4),
    LemmaRule("eu", "ar", min_length=4),
    LemmaRule("en", "ar", min_length=4),
    LemmaRule("a", "ar", min_length=3),
]

LEMMA_RULES = {
    "verb": VERB_LEMMA_RULES,
    "aux": VERB_LEMMA_RULES,
    "noun": [
        LemmaRule("ions", "ió"),
        LemmaRule("ces", "ç", min_length=5),
        LemmaRule("ques", "ca"),
        LemmaRule("gues", "ga"),
        LemmaRule("es", "a", min_length=4),
        LemmaRule("s", "", min_length=3),
    ],
    "adj": [
        LemmaRule("ques", "c"),
        LemmaRule("es", "", min_length=4),
        LemmaRule("a", "", min_length=3),
        LemmaRule("s", "", min_length=3),
    ],
}

# ============================================================================
# Feature extraction
# ============================================================================

VERB_FEATURES = [
    (ends_like(("ant", "ent", "int")), {Feature.TENSE: "present", Feature.ASPECT: "progressive", Feature.MOOD: "indicative"}),
    (ends_like(("at", "ut", "it")), {Feature.TENSE: "past", Feature.ASPECT: "perfective"}),
    (ends_like(("ria", "ries", "ríem", "ríeu", "rien")), {Feature.TENSE: "conditional", Feature.MOOD: "conditional"}),
    (ends_like(("ré", "ràs", "rà", "rem", "reu", "ran")), {Feature.TENSE: "future", Feature.MOOD: "indicative"}),
    (ends_like(("í", "ares", "à", "àrem", "àreu", "aren")), {Feature.TENSE: "past", Feature.MOOD: "indicative"}),
    (ends_like(("ava", "aves", "àvem", "àveu", "aven", "ia", "ies", "íem", "íeu", "ien")),
     {Feature.TENSE: "imperfect", Feature.MOOD: "indicative"}),
    (always, {Feature.TENSE: "present", Feature.MOOD: "indicative"}),
]


def _plural(word, lemma):
    return word != lemma and word.endswith("s")


NOUN_FEATURES = [
    (ends_like(("a", "es")), {Feature.GENDER: "feminine"}),
    (ends_like(("s",)), {Feature.GENDER: "masculine"}),
    (_plural, {Feature.NUMBER: "plural"}),
    (always, {Feature.NUMBER: "singular"}),
]

ADJECTIVE_FEATURES = [
    (ends_like(("a", "es")), {Feature.GENDER: "feminine"}),
    (_plural, {Feature.NUMBER: "plural"}),
    (always, {Feature.NUMBER: "singular"}),
]

FEATURE_RULES = {
    "verb": VERB_FEATURES,
    "aux": VERB_FEATURES,
    "noun": NOUN_FEATURES,
    "adj": ADJECTIVE_FEATURES,
}

PROFILE = LanguageProfile(
    code="ca",
    name="Catalan",
    token_patterns=TOKEN_PATTERNS,
    lexicon_categories=LEXICON_CATEGORIES,
    context_rules=CONTEXT_RULES,
    morphological_rules=MORPHOLOGICAL_RULES,
    irregular_lemmas=_irregular_table(),
    lemma_rules=LEMMA_RULES,
    feature_rules=FEATURE_RULES,
    articles=frozenset(ARTICLES),
    relativizers=frozenset({"que", "qui", "quin", "quina", "quins", "quines"}),
    adverbial_relativizers=frozenset({"on", "quan", "com"}),
    non_restrictive_relativizers=frozenset({"que", "qui"}),
    quantifier_adjectives=QUANTIFIER_ADJECTIVES,
    postnominal_adjectives=True,
    opening_punctuation=frozenset({"¿", "¡", "«", "‹", '"', "(", "[", "“"}),
)
