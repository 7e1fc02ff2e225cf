"""
Command-Line Interface for Sintakso.

- Parsing text into sentence trees and dependency graphs
- Inspecting individual stages (tokens, tags)
- Training statistical taggers from CoNLL-U corpora
"""
import sys
import argparse
import json
import logging

from .config import Settings
from .errors import SintaksoError
from .languages import LANGUAGES
from .logging_config import setup_logging
from .pipeline import STAGES, GrammarPipeline
from .serialization import to_dict
from .tagger import TagMode

logger = logging.getLogger(__name__)


def _read_text(args) -> str:
    """Text from the positional argument, --file, or stdin."""
    if args.text:
        return args.text
    if args.file:
        with open(args.file, 'r', encoding='utf-8') as f:
            return f.read()
    return sys.stdin.read()


def _settings(args) -> Settings:
    return Settings.from_env().override(
        language=getattr(args, 'language', None),
        tag_mode=getattr(args, 'mode', None),
        hmm_model_path=getattr(args, 'hmm_model', None),
        neural_model_path=getattr(args, 'neural_model', None),
        workers=getattr(args, 'workers', None),
        log_file=args.log_file,
        log_level='DEBUG' if args.debug else None,
    ).validate()


def _pipeline(args) -> GrammarPipeline:
    return GrammarPipeline.from_settings(args.settings)


def _print_json(data):
    print(json.dumps(data, indent=2, ensure_ascii=False))


# ============================================================================
# Analysis commands
# ============================================================================

def cmd_parse(args):
    """Parse text into sentence trees."""
    from .deparser import pretty_print

    pipeline = _pipeline(args)
    text = _read_text(args)

    if args.trace or args.stop_after:
        trace = pipeline.run(text, stop_after=args.stop_after)
        print(trace.to_json())
        return 1 if trace.error else 0

    analysis = pipeline.analyze(text)
    if args.format == 'json':
        _print_json({
            "document": to_dict(analysis.document),
            "dependencies": to_dict(analysis.dependencies),
        })
    else:
        print(pretty_print(analysis.document))
    return 0


def cmd_tokens(args):
    """Show the tokenizer output with source positions."""
    tokens = _pipeline(args).tokenize(_read_text(args))
    if args.format == 'json':
        _print_json(to_dict(tokens))
        return 0
    for token in tokens:
        line, column = token.span.start_pos
        print(f"{token.text}\t{line}:{column}\t{token.span.start_offset}-{token.span.end_offset}\t{token.pos_tag}")
    return 0


def cmd_tag(args):
    """Show tags, lemmas and features."""
    from .morphology import analyze

    pipeline = _pipeline(args)
    tokens = analyze(pipeline.tag(pipeline.tokenize(_read_text(args))), pipeline.profile)
    if args.format == 'json':
        _print_json(to_dict(tokens))
        return 0
    for token in tokens:
        features = "|".join(
            f"{feature.value}={value}" for feature, value in sorted(
                token.morphology.items(), key=lambda item: item[0].value
            )
        ) or "_"
        print(f"{token.text}\t{token.pos_tag}\t{token.lemma}\t{features}")
    return 0


def cmd_deps(args):
    """Show dependency edges, one sentence per block."""
    analysis = _pipeline(args).analyze(_read_text(args))
    if args.format == 'json':
        _print_json(to_dict(analysis.dependencies))
        return 0
    blocks = ["\n".join(repr(edge) for edge in edges) for edges in analysis.dependencies]
    print("\n\n".join(blocks))
    return 0


# ============================================================================
# Training commands
# ============================================================================

def _load_corpus(args):
    from .corpus import read_conllu, train_dev_split

    sentences = read_conllu(args.corpus)
    if args.dev_ratio > 0:
        train, dev = train_dev_split(sentences, dev_ratio=args.dev_ratio, seed=args.seed)
    else:
        train, dev = sentences, []
    logger.info(f"Corpus split: {len(train)} training, {len(dev)} development sentences")
    return train, dev


def _report(model, dev, output):
    from .corpus import accuracy

    print(f"Saved model to {output}")
    print(f"  sentences: {model.metadata['training_size']}")
    print(f"  tags:      {model.metadata['num_tags']}")
    print(f"  words:     {model.metadata['vocab_size']}")
    if dev:
        predicted = [model.predict(words) for words, _ in dev]
        score = accuracy(predicted, [tags for _, tags in dev])
        print(f"  dev accuracy: {score:.2%} ({len(dev)} sentences)")


def cmd_train_hmm(args):
    """Train a trigram HMM tagger on a CoNLL-U corpus."""
    from .hmm import HMMTagger

    train, dev = _load_corpus(args)
    model = HMMTagger(smoothing_k=args.smoothing).train(train)
    model.save(args.output)
    _report(model, dev, args.output)
    return 0


def cmd_train_neural(args):
    """Train a BiLSTM tagger on a CoNLL-U corpus."""
    try:
        from .neural import NeuralTagger
    except ImportError as e:
        raise SintaksoError("Neural training requires torch: pip install 'sintakso[neural]'") from e

    train, dev = _load_corpus(args)
    model = NeuralTagger(
        embedding_dim=args.embedding_dim,
        hidden_dim=args.hidden_dim,
        seed=args.seed,
    ).train(train, epochs=args.epochs, lr=args.lr, batch_size=args.batch_size)
    model.save(args.output)
    _report(model, dev, args.output)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='sintakso',
        description='Sintakso: grammatical analysis for English, Spanish and Catalan',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Parse text into a tree or JSON
  sintakso parse "The cat sat on the mat."
  sintakso parse --language es --format json "El gato negro come."
  sintakso parse --file chapter.txt --workers 4

  # Record every stage
  sintakso parse --trace "The cat sat."
  sintakso parse --stop-after Tagger "The cat sat."

  # Inspect stages
  sintakso tokens --language ca "L'home col·labora."
  sintakso tag "The dogs were running."
  sintakso deps "I see the cat that sits."

  # Train statistical taggers
  sintakso train-hmm en_ewt-ud-train.conllu -o models/en_hmm.npz
  sintakso parse --mode hmm --hmm-model models/en_hmm.npz "The cat sat."
  sintakso train-neural en_ewt-ud-train.conllu -o models/en_bilstm.pt --epochs 5

Environment:
  SINTAKSO_LANGUAGE, SINTAKSO_TAG_MODE, SINTAKSO_HMM_MODEL, SINTAKSO_NEURAL_MODEL,
  SINTAKSO_WORKERS, SINTAKSO_LOG_FILE, SINTAKSO_LOG_LEVEL
        """
    )
    parser.add_argument('--debug', action='store_true', help='Verbose logging with file/line context')
    parser.add_argument('--log-file', help="Log file (default: sintakso.log, '' for console only)")

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Options shared by every analysis command
    analysis = argparse.ArgumentParser(add_help=False)
    analysis.add_argument('text', nargs='?', help='Text to analyze (default: read stdin)')
    analysis.add_argument('-f', '--file', help='Read input from file')
    analysis.add_argument('-l', '--language', choices=sorted(LANGUAGES), help='Language code (default: en)')
    analysis.add_argument('-m', '--mode', choices=[mode.value for mode in TagMode],
                          help='Tagging mode (default: rule_based)')
    analysis.add_argument('--hmm-model', help='Path to a trained HMM (.npz)')
    analysis.add_argument('--neural-model', help='Path to a trained BiLSTM checkpoint')
    analysis.add_argument('--workers', type=int, help='Threads for sentence-level parsing (default: 1)')

    # --- parse command ---
    parser_parse = subparsers.add_parser('parse', parents=[analysis], help='Parse text into sentence trees')
    parser_parse.add_argument('--format', choices=['tree', 'json'], default='tree',
                              help='Output format (default: tree)')
    parser_parse.add_argument('--trace', action='store_true', help='Print the execution trace as JSON')
    parser_parse.add_argument('--stop-after', choices=STAGES, help='Stop the traced run after this stage')
    parser_parse.set_defaults(func=cmd_parse)

    # --- tokens command ---
    parser_tokens = subparsers.add_parser('tokens', parents=[analysis], help='Show tokens and spans')
    parser_tokens.add_argument('--format', choices=['text', 'json'], default='text',
                               help='Output format (default: text)')
    parser_tokens.set_defaults(func=cmd_tokens)

    # --- tag command ---
    parser_tag = subparsers.add_parser('tag', parents=[analysis], help='Show tags, lemmas and features')
    parser_tag.add_argument('--format', choices=['text', 'json'], default='text',
                            help='Output format (default: text)')
    parser_tag.set_defaults(func=cmd_tag)

    # --- deps command ---
    parser_deps = subparsers.add_parser('deps', parents=[analysis], help='Show dependency edges')
    parser_deps.add_argument('--format', choices=['text', 'json'], default='text',
                             help='Output format (default: text)')
    parser_deps.set_defaults(func=cmd_deps)

    # Options shared by the training commands
    training = argparse.ArgumentParser(add_help=False)
    training.add_argument('corpus', help='Training corpus in CoNLL-U format')
    training.add_argument('-o', '--output', required=True, help='Where to save the model')
    training.add_argument('--dev-ratio', type=float, default=0.1,
                          help='Fraction held out for evaluation (default: 0.1, 0 to disable)')
    training.add_argument('--seed', type=int, default=42, help='Random seed (default: 42)')

    # --- train-hmm command ---
    parser_hmm = subparsers.add_parser('train-hmm', parents=[training], help='Train a trigram HMM tagger')
    parser_hmm.add_argument('--smoothing', type=float, default=0.001, help='Add-k smoothing (default: 0.001)')
    parser_hmm.set_defaults(func=cmd_train_hmm)

    # --- train-neural command ---
    parser_neural = subparsers.add_parser('train-neural', parents=[training], help='Train a BiLSTM tagger')
    parser_neural.add_argument('--epochs', type=int, default=10, help='Training epochs (default: 10)')
    parser_neural.add_argument('--lr', type=float, default=0.01, help='Learning rate (default: 0.01)')
    parser_neural.add_argument('--batch-size', type=int, default=16, help='Sentences per batch (default: 16)')
    parser_neural.add_argument('--embedding-dim', type=int, default=64, help='Embedding size (default: 64)')
    parser_neural.add_argument('--hidden-dim', type=int, default=128, help='LSTM hidden size (default: 128)')
    parser_neural.set_defaults(func=cmd_train_neural)

    return parser


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # If no command specified, show help
    if not hasattr(args, 'func'):
        parser.print_help()
        return 1

    try:
        args.settings = _settings(args)
        setup_logging(
            log_file=args.settings.log_file,
            level=args.settings.logging_level,
            debug=args.debug,
            stream=sys.stderr,
        )
        return args.func(args)
    except (SintaksoError, OSError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
