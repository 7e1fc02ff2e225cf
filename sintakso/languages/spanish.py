"""
Spanish rule tables.

Adds to the shared engine:
- Inverted punctuation and guillemets (¿ ¡ « »)
- Abbreviations (Sr., Dra., etc.) and the contractions del/al
- Verb forms carrying enclitic pronouns (dámelo, decírselo)
- Post-nominal adjectives with quantifiers before the noun
"""
import re

from ..nodes import Feature
from ..rules import LemmaRule, always, capitalized, ends_like, matches, suffix
from .profile import LETTER, LanguageProfile, NOT_LETTER, NUMBER, PUNCTUATION, WORD

# ============================================================================
# Token patterns
# ============================================================================

ABBREVIATION = r"(?:Sra|Srta|Sr|Dra|Dr|Prof|Lic|Ing|Uds|Ud|Vd|Avda|Av|etc|pág|núm|tel)\."
CONTRACTION = rf"(?i:del|al){NOT_LETTER}"
# Infinitive or gerund with enclitics (comerlo, diciéndoselo), or an
# accented imperative carrying two of them (dámelo)
CLITIC_VERB = (
    rf"(?:{LETTER}{{2,}}(?:ar|er|ir|ándo|iéndo)(?:(?:me|te|se|nos|os)(?:lo|la|los|las|le|les)?|lo|la|los|las|le|les)"
    rf"|{LETTER}*[áéíó]{LETTER}*(?:me|te|se|nos)(?:lo|la|los|las|le|les)){NOT_LETTER}"
)

TOKEN_PATTERNS = [
    ("abbreviation", ABBREVIATION),   # Sr., etc.
    ("contraction", CONTRACTION),     # del, al
    ("clitic", CLITIC_VERB),          # dámelo, comerlo
    ("hyphenated", rf"{WORD}(?:-{WORD})+"),
    ("number", NUMBER),
    ("word", WORD),
    ("punct", r"[¿¡«»‹›€]"),
    ("punct", PUNCTUATION),
]

# ============================================================================
# Closed-class lexicon
# ============================================================================

ARTICLES = {"el", "la", "los", "las", "un", "una", "unos", "unas"}

DETERMINERS = ARTICLES | {
    "mi", "mis", "tu", "tus", "su", "sus", "nuestro", "nuestra", "nuestros", "nuestras",
    "cada", "cuyo", "cuya", "cuyos", "cuyas",
}

PRONOUNS = {
    "yo", "me", "mí", "conmigo",
    "tú", "te", "ti", "contigo", "usted",
    "él", "ella", "se", "sí", "consigo",
    "nosotros", "nosotras", "nos",
    "vosotros", "vosotras", "os",
    "ellos", "ellas", "ustedes",
    "lo", "le", "les",
    "esto", "eso", "aquello",
    "este", "esta", "ese", "esa", "aquel", "aquella",
    "estos", "estas", "esos", "esas", "aquellos", "aquellas",
    "quien", "quienes", "cual", "cuales", "que",
    "algo", "alguien", "alguno", "alguna", "algunos", "algunas",
    "nada", "nadie", "ninguno", "ninguna", "ningunos", "ningunas",
    "todo", "toda", "todos", "todas",
}

PREPOSITIONS = {
    "a", "ante", "bajo", "cabe", "con", "contra", "de", "desde",
    "en", "entre", "hacia", "hasta", "para", "por", "según",
    "sin", "so", "sobre", "tras", "durante", "mediante",
    "del", "al",
}

COORDINATING_CONJUNCTIONS = {"y", "e", "o", "u", "pero", "mas", "sino", "ni"}

SUBORDINATING_CONJUNCTIONS = {
    "que", "como", "cuando", "donde", "si", "porque", "aunque", "mientras",
    "apenas", "pues", "luego", "conque", "así",
}

AUXILIARIES = """
    ser soy eres es somos sois son
    era eras éramos erais eran
    fui fuiste fue fuimos fuisteis fueron
    seré serás será seremos seréis serán
    sería serías seríamos seríais serían
    sea seas seamos seáis sean
    fuera fueras fuéramos fuerais fueran
    sido siendo
    estar estoy estás está estamos estáis están
    estaba estabas estábamos estabais estaban
    estuve estuviste estuvo estuvimos estuvisteis estuvieron
    estaré estarás estará estaremos estaréis estarán
    estaría estarías estaríamos estaríais estarían
    esté estés estemos estéis estén
    estado estando
    haber he has ha hemos habéis han
    había habías habíamos habíais habían
    hube hubiste hubo hubimos hubisteis hubieron
    habré habrás habrá habremos habréis habrán
    habría habrías habríamos habríais habrían
    haya hayas hayamos hayáis hayan
    habido habiendo
""".split()

COMMON_VERBS = """
    ir voy vas va vamos vais van iba ibas íbamos ibais iban
    hacer hago haces hace hacemos hacéis hacen hizo
    decir digo dices dice decimos decís dicen dijo
    poder puedo puedes puede podemos podéis pueden
    querer quiero quieres quiere queremos queréis quieren
    ver veo ves ve vemos veis ven vio
    dar doy das da damos dais dan
    saber sé sabes sabe sabemos sabéis saben
    tener tengo tienes tiene tenemos tenéis tienen
    venir vengo vienes viene venimos venís vienen
    poner pongo pones pone ponemos ponéis ponen
    salir salgo sales sale salimos salís salen
    traer traigo traes trae traemos traéis traen
    llegar llego llegas llega llegamos llegáis llegan
    pasar paso pasas pasa pasamos pasáis pasan
    trabajar trabajo trabajas trabaja trabajamos trabajáis trabajan
    vivir vivo vives vive vivimos vivís viven
    comer como comes come comemos coméis comen
    beber bebo bebes bebe bebemos bebéis beben
    hablar hablo hablas habla hablamos habláis hablan
    dormir duermo duermes duerme dormimos dormís duermen
""".split()

COMMON_NOUNS = """
    gato gata gatos gatas perro perra perros perras
    casa casas mesa mesas silla sillas libro libros
    día días semana semanas mes meses año años
    hombre hombres mujer mujeres niño niña niños niñas
    ciudad ciudades país países mundo mundos
    agua aguas tierra tierras fuego fuegos aire aires
    coche coches carro carros tren trenes avión aviones
    comida comidas bebida bebidas pescado
    escuela escuelas universidad universidades
    familia familias amigo amiga amigos amigas
    mano manos pie pies cabeza cabezas ojo ojos
    vida vidas muerte muertes tiempo tiempos
    mercado mercados parque parques calle calles
""".split()

COMMON_ADJECTIVES = """
    bueno buena buenos buenas buen malo mala malos malas mal
    grande grandes gran pequeño pequeña pequeños pequeñas
    nuevo nueva nuevos nuevas viejo vieja viejos viejas
    joven jóvenes mejor mejores peor peores
    mucho mucha muchos muchas poco poca pocos pocas
    otro otra otros otras mismo misma mismos mismas
    varios varias ambos ambas
    algún ningún
    propio propia propios propias último última últimos últimas
    primer primero primera primeros primeras
    segundo segunda segundos segundas
    tercero tercera terceros terceras
    blanco blanca blancos blancas negro negra negros negras
    rojo roja rojos rojas
""".split()

ADVERBS = """
    sí no muy bien
    aquí ahí allí acá allá
    hoy ayer mañana ahora después antes entonces
    siempre nunca jamás
    ya todavía aún
    también tampoco
    más menos
    casi solo solamente
    quizá quizás
""".split()

PARTICLES = {"no", "sí"}

INTERJECTIONS = {"ah", "oh", "eh", "hey", "hola", "adiós", "ay", "uf"}

LEXICON_CATEGORIES = [
    ("det", DETERMINERS),
    ("pron", PRONOUNS),
    ("adp", PREPOSITIONS),
    ("cconj", COORDINATING_CONJUNCTIONS),
    ("aux", AUXILIARIES),
    # before subordinators so that "como" reads as "I eat"
    ("verb", COMMON_VERBS),
    ("sconj", SUBORDINATING_CONJUNCTIONS),
    ("noun", COMMON_NOUNS),
    ("adj", COMMON_ADJECTIVES),
    ("adv", ADVERBS),
    ("part", PARTICLES),
    ("intj", INTERJECTIONS),
]

QUANTIFIER_ADJECTIVES = frozenset("""
    mucho mucha muchos muchas poco poca pocos pocas
    varios varias alguno alguna algunos algunas algún
    ninguno ninguna ningunos ningunas ningún
    todo toda todos todas otro otra otros otras
    cada ambos ambas sendos sendas
    primer primera buen gran
""".split())

SUBJECT_PRONOUNS = frozenset({"yo", "tú", "él", "ella", "nosotros", "nosotras", "vosotros", "vosotras", "ellos", "ellas"})

ADJECTIVAL = suffix("oso", "osa", "ivo", "iva", "able", "ible", "ante", "ente")
AGREEMENT = suffix("o", "a", "os", "as", min_length=4)

# ============================================================================
# Context rules
# ============================================================================


def after_determiner(token, previous, following, profile):
    if previous is not None and previous.pos_tag == "det":
        return "adj" if ADJECTIVAL(token.text) else "noun"
    return None


def after_noun(token, previous, following, profile):
    """Adjectives usually follow the noun (gato blanco, casa grande)."""
    if previous is not None and previous.pos_tag == "noun" and (AGREEMENT(token.text) or ADJECTIVAL(token.text)):
        return "adj"
    return None


def after_adposition(token, previous, following, profile):
    if previous is not None and previous.pos_tag == "adp" and not token.text[0].isupper():
        return "noun"
    return None


def after_negation_or_subject(token, previous, following, profile):
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
    after_negation_or_subject,
]

# ============================================================================
# Morphological rule bank
# ============================================================================

MORPHOLOGICAL_RULES = [
    (suffix("mente", min_length=7), "adv"),
    (matches(CLITIC_VERB), "verb"),
    (suffix("ción", "sión", "miento", "dad", "tad", "ncia", "ismo", "ista"), "noun"),
    (suffix("iente", "oso", "osa", "ivo", "iva", "able", "ible", "ante", "ente"), "adj"),
    (capitalized(), "propn"),
    (suffix("ando", "iendo"), "verb"),                                   # gerund
    (suffix("ado", "ido", min_length=5), "verb"),                        # participle
    (suffix("ábamos", "abais", "aban", "abas", "aba"), "verb"),          # imperfect -ar
    (suffix("ríamos", "ríais", "rían", "rías", "ría"), "verb"),          # conditional
    (suffix("íamos", "íais", "ían", "ías"), "verb"),                     # imperfect -er/-ir
    (suffix("ía", min_length=4), "verb"),
    (suffix("remos", "réis", "rán", "rás", "ré", "rá"), "verb"),         # future
    (suffix("asteis", "isteis", "ieron", "aron", "aste", "iste", "ió"), "verb"),  # preterite
    (suffix("amos", "emos", "imos", "áis", "éis"), "verb"),
    (suffix("é", "ó"), "verb"),
    (suffix("í", min_length=3), "verb"),
    (suffix("as", "es", min_length=5), "verb"),
    (suffix("an", "en", min_length=4), "verb"),
    (suffix("o", "a", "e", min_length=5), "verb"),
]

# ============================================================================
# Lemmatization
# ============================================================================

IRREGULAR_VERBS = {
    "ser": "soy eres es somos sois son era eras éramos erais eran fui fuiste fue fuimos fuisteis fueron sido siendo sea seas sean",
    "estar": "estoy estás está estamos estáis están estaba estabas estábamos estabais estaban estuve estuviste estuvo estuvimos estuvisteis estuvieron estado estando",
    "haber": "he has ha hemos habéis han había habías habíamos habíais habían hube hubiste hubo habido habiendo haya",
    "ir": "voy vas va vamos vais van iba ibas íbamos ibais iban",
    "hacer": "hago haces hace hacemos hacéis hacen hice hiciste hizo hicimos hicieron hecho haciendo",
    "tener": "tengo tienes tiene tenemos tenéis tienen tuve tuviste tuvo tuvimos tuvieron",
    "decir": "digo dices dice decimos decís dicen dije dijiste dijo dijimos dijeron dicho diciendo",
    "poder": "puedo puedes puede pueden pude pudo pudieron pudiendo",
    "querer": "quiero quieres quiere quieren quise quiso quisieron",
    "ver": "veo ves ve vemos veis ven vi viste vio vimos vieron visto",
    "dar": "doy das da damos dais dan di diste dio dimos dieron",
    "saber": "sé sabes sabe sabemos sabéis saben supe supo supieron",
    "venir": "vengo vienes viene vienen vine vino vinieron viniendo",
    "poner": "pongo pones pone ponen puse puso pusieron puesto",
    "salir": "salgo",
    "traer": "traigo traje trajo trajeron",
    "dormir": "duermo duermes duerme duermen durmió durmiendo",
}

IRREGULAR_NOUNS = {"días": "día", "países": "país", "aviones": "avión", "meses": "mes"}

IRREGULAR_ADJECTIVES = {
    "buen": "bueno", "mal": "malo", "gran": "grande", "mejor": "bueno", "mejores": "bueno",
    "peor": "malo", "peores": "malo", "primer": "primero", "algún": "alguno", "ningún": "ninguno",
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


# ============================================================================
# Enclitic pronouns
# ============================================================================

ENCLITICS = re.compile(r"(?P<host>\w{2,}?)(?P<clitics>(?:me|te|se|nos|os)?(?:lo|la|los|las|le|les)|me|te|se|nos|os)")
VERB_HOST_ENDINGS = ("ar", "er", "ir", "ando", "iendo")
STRESS_ACCENTS = str.maketrans("áéíó", "aeio")
# Present-tense verbs that read like an infinitive plus a pronoun
ENCLITIC_LOOKALIKES = frozenset({"parte", "comparte", "reparte", "imparte", "charla", "charlas"})


def strip_enclitics(word: str) -> str:
    """
    Host verb of a form carrying enclitic pronouns.

    The host is an infinitive or gerund (comerlo, diciéndoselo) or an
    imperative that needed a written accent to keep its stress (dámelo).
    The accent is removed from the host. Other words come back unchanged.

    >>> strip_enclitics("diciéndoselo")
    'diciendo'
    """
    if word in ENCLITIC_LOOKALIKES:
        return word
    match = ENCLITICS.fullmatch(word)
    if match is None:
        return word
    host = match.group("host")
    bare = host.translate(STRESS_ACCENTS)
    # No infinitive ends in -ier (convierte, divierte)
    if bare.endswith(VERB_HOST_ENDINGS) and not bare.endswith("ier"):
        return bare
    # Accented imperatives only with a pronoun pair, so comíamos keeps its -os
    if bare != host and len(match.group("clitics")) > 3:
        return bare
    return word


VERB_LEMMA_RULES = [
    LemmaRule("ar", "ar"),
    LemmaRule("er", "er"),
    LemmaRule("ir", "ir"),
    LemmaRule("ando", "ar", min_length=6),
    LemmaRule("iendo", "er", min_length=7),
    LemmaRule("ábamos", "ar"),
    LemmaRule("abais", "ar"),
    LemmaRule("aban", "ar"),
    LemmaRule("abas", "ar"),
    LemmaRule("aba", "ar", min_length=5),
    LemmaRule("aríamos", "ar"),
    LemmaRule("arían", "ar"),
    LemmaRule("aría", "ar"),
    LemmaRule("íamos", "er"),
    LemmaRule("ían", "er"),
    LemmaRule("ías", "er"),
    LemmaRule("ía", "er", min_length=4),
    LemmaRule("aremos", "ar"),
    LemmaRule("arán", "ar"),
    LemmaRule("arás", "ar"),
    LemmaRule("ará", "ar"),
    LemmaRule("aré", "ar"),
    LemmaRule("asteis", "ar"),
    LemmaRule("isteis", "er"),
    LemmaRule("aron", "ar"),
    LemmaRule("ieron", "er"),
    LemmaRule("aste", "ar"),
    LemmaRule("iste", "er"),
    LemmaRule("ió", "er"),
    LemmaRule("ó", "ar"),
    LemmaRule("é", "ar"),
    LemmaRule("í", "ir", min_length=3),
    LemmaRule("amos", "ar", min_length=6),
    LemmaRule("emos", "er", min_length=6),
    LemmaRule("imos", "ir", min_length=6),
    LemmaRule("áis", "ar"),
    LemmaRule("éis", "er"),
    LemmaRule("ís", "ir"),
    LemmaRule("ado", "ar", min_length=5),
    LemmaRule("ido", "er", min_length=5),
    LemmaRule("an", "ar", min_length=4),
    LemmaRule("en", "er", min_length=4),
    LemmaRule("as", "ar", min_length=4),
    LemmaRule("es", "er", min_length=4),
    LemmaRule("o", "ar", min_length=3),
    LemmaRule("a", "ar", min_length=3),
    LemmaRule("e", "er", min_length=3),
]

LEMMA_RULES = {
    "verb": VERB_LEMMA_RULES,
    "aux": VERB_LEMMA_RULES,
    "noun": [
        LemmaRule("ciones", "ción"),
        LemmaRule("siones", "sión"),
        LemmaRule("iones", "ión"),
        LemmaRule("dades", "dad"),
        LemmaRule("tades", "tad"),
        LemmaRule("ces", "z", min_length=5),
        LemmaRule("eres", "er"),
        LemmaRule("enes", "en"),
        LemmaRule("ales", "al"),
        LemmaRule("ores", "or"),
        LemmaRule("s", "", min_length=3),
    ],
    "adj": [
        LemmaRule("bles", "ble"),
        LemmaRule("ntes", "nte"),
        LemmaRule("les", "l", min_length=5),
        LemmaRule("ces", "z", min_length=5),
        LemmaRule("as", "o", min_length=4),
        LemmaRule("os", "o", min_length=4),
        LemmaRule("a", "o", min_length=3),
        LemmaRule("es", "e", min_length=5),
    ],
}

# ============================================================================
# Feature extraction
# ============================================================================

VERB_FEATURES = [
    (ends_like(("ando", "iendo")), {Feature.TENSE: "present", Feature.ASPECT: "progressive", Feature.MOOD: "indicative"}),
    (ends_like(("ado", "ido")), {Feature.TENSE: "past", Feature.ASPECT: "perfective"}),
    (ends_like(("ría", "rías", "ríamos", "ríais", "rían")), {Feature.TENSE: "conditional", Feature.MOOD: "conditional"}),
    (ends_like(("aba", "abas", "ábamos", "abais", "aban", "ía", "ías", "íamos", "íais", "ían")),
     {Feature.TENSE: "imperfect", Feature.MOOD: "indicative"}),
    (ends_like(("ré", "rás", "rá", "remos", "réis", "rán")), {Feature.TENSE: "future", Feature.MOOD: "indicative"}),
    (ends_like(("é", "ó", "aste", "iste", "asteis", "isteis", "aron", "ieron")), {Feature.TENSE: "past", Feature.MOOD: "indicative"}),
    (always, {Feature.TENSE: "present", Feature.MOOD: "indicative"}),
]


def _plural(word, lemma):
    return word != lemma and word.endswith("s")


NOMINAL_FEATURES = [
    (ends_like(("o", "os")), {Feature.GENDER: "masculine"}),
    (ends_like(("a", "as")), {Feature.GENDER: "feminine"}),
    (_plural, {Feature.NUMBER: "plural"}),
    (always, {Feature.NUMBER: "singular"}),
]

FEATURE_RULES = {
    "verb": VERB_FEATURES,
    "aux": VERB_FEATURES,
    "noun": NOMINAL_FEATURES,
    "adj": NOMINAL_FEATURES,
}

PROFILE = LanguageProfile(
    code="es",
    name="Spanish",
    token_patterns=TOKEN_PATTERNS,
    lexicon_categories=LEXICON_CATEGORIES,
    context_rules=CONTEXT_RULES,
    morphological_rules=MORPHOLOGICAL_RULES,
    irregular_lemmas=_irregular_table(),
    lemma_rules=LEMMA_RULES,
    enclitic_host=strip_enclitics,
    feature_rules=FEATURE_RULES,
    articles=frozenset(ARTICLES),
    relativizers=frozenset({"que", "quien", "quienes", "cual", "cuales", "cuyo", "cuya", "cuyos", "cuyas"}),
    adverbial_relativizers=frozenset({"donde", "cuando", "como"}),
    non_restrictive_relativizers=frozenset({"que", "quien", "quienes", "cual", "cuales"}),
    quantifier_adjectives=QUANTIFIER_ADJECTIVES,
    postnominal_adjectives=True,
    opening_punctuation=frozenset({"¿", "¡", "«", "‹", '"', "(", "[", "“"}),
)
