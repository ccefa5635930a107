#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
classicxploit.py — affine and Vigenere encryption, decryption and key recovery
from ciphertext alone or with known-plaintext hints.
"""

import argparse
import itertools
import math
import os
import sys
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, NamedTuple, Optional, Sequence, Set, Tuple

from colorama import init as _init_colorama, Fore, Style

# ---------- Colors ----------
_init_colorama(autoreset=True)
BOLD = Style.BRIGHT; RESET = Style.RESET_ALL
CYAN, GREEN, YELLOW, BLUE = Fore.CYAN, Fore.GREEN, Fore.YELLOW, Fore.BLUE

def cCYN(s): return f"{BOLD}{CYAN}{s}{RESET}"
def cGRN(s): return f"{BOLD}{GREEN}{s}{RESET}"
def cYEL(s): return f"{BOLD}{YELLOW}{s}{RESET}"
def cBLU(s): return f"{BLUE}{s}{RESET}"

def eprint(*a, **k): print(*a, file=sys.stderr, **k)

# ---------- Errors ----------
class CrackInputError(ValueError):
    """Input no search can run on: empty text, zero counts, bad hints or limits."""

class InvalidKeyError(ValueError):
    """A key that cannot encrypt or decrypt over the given alphabet."""

# ---------- Alphabet ----------
class Alphabet:
    """Ordered set of symbols; a symbol's position is its residue mod n."""

    def __init__(self, symbols: str):
        if not symbols:
            raise ValueError("alphabet must contain at least one symbol")
        if len(set(symbols)) != len(symbols):
            raise ValueError(f"alphabet has repeated symbols: {symbols!r}")
        self.symbols = symbols
        self._index = {ch: i for i, ch in enumerate(symbols)}
        # lower-case alphabets accept upper-case input
        self._fold = symbols == symbols.lower()

    def __len__(self) -> int:
        return len(self.symbols)

    def __iter__(self):
        return iter(self.symbols)

    def __contains__(self, ch) -> bool:
        return ch in self._index

    def __eq__(self, other) -> bool:
        return isinstance(other, Alphabet) and other.symbols == self.symbols

    def __hash__(self) -> int:
        return hash(self.symbols)

    def __repr__(self) -> str:
        return f"Alphabet({self.symbols!r})"

    def residue(self, ch: str) -> int:
        return self._index[ch]

    def symbol(self, value: int) -> str:
        return self.symbols[value % len(self.symbols)]

    def fold(self, text: str) -> str:
        return text.lower() if self._fold else text

    def filter(self, text: str) -> str:
        """Case-fold and keep only symbols of this alphabet."""
        return "".join(ch for ch in self.fold(text) if ch in self._index)

ENGLISH_ALPHABET = Alphabet("abcdefghijklmnopqrstuvwxyz")

# ---------- Modular arithmetic ----------
def _inv_mod(a: int, m: int) -> Optional[int]:
    a = a % m
    for x in range(1, m):
        if (a * x) % m == 1:
            return x
    return None

# ---------- Reference profiles ----------
class LanguageProfile:
    """Expected relative frequency of every symbol of an alphabet in plain text.

    ``ranking`` lists the symbols from most to least frequent. When it is not
    given it is derived from ``frequencies`` with ties kept in alphabet order.
    """

    def __init__(self, name: str, alphabet: Alphabet, frequencies: Sequence[float], ranking: Optional[str] = None):
        if len(frequencies) != len(alphabet):
            raise ValueError(f"profile {name!r} has {len(frequencies)} frequencies for {len(alphabet)} symbols")
        if any(f < 0 for f in frequencies):
            raise ValueError(f"profile {name!r} has negative frequencies")
        if ranking is None:
            ordered = sorted(zip(alphabet, frequencies), key=lambda p: p[1], reverse=True)
            ranking = "".join(sym for sym, _ in ordered)
        elif sorted(ranking) != sorted(alphabet.symbols):
            raise ValueError(f"profile {name!r} ranking must list every alphabet symbol once")
        self.name = name
        self.alphabet = alphabet
        self.frequencies: Tuple[float, ...] = tuple(float(f) for f in frequencies)
        self.ranking = ranking

    def frequency(self, ch: str) -> float:
        return self.frequencies[self.alphabet.residue(ch)]

    def __repr__(self) -> str:
        return f"LanguageProfile({self.name!r}, {self.alphabet.symbols!r})"

ENGLISH = LanguageProfile(
    "english",
    ENGLISH_ALPHABET,
    [.082, .015, .028, .043, .127, .022, .020, .061, .070, .002,
     .008, .040, .024, .067, .075, .019, .001, .060, .063, .091,
     .028, .010, .023, .001, .020, .001],
    ranking="etaoinsrhdlucmfywgpbvkxqjz",
)

def load_profile(path: str, alphabet: Alphabet = ENGLISH_ALPHABET) -> LanguageProfile:
    """Read ``symbol frequency`` lines (``#`` starts a comment) into a profile for ``alphabet``."""
    table: Dict[str, float] = {}
    with open(path, "r", encoding="utf-8") as f:
        for lineno, raw in enumerate(f, start=1):
            line = raw.split("#", 1)[0].strip()
            if not line:
                continue
            parts = line.split()
            if len(parts) != 2:
                raise ValueError(f"{path}:{lineno}: expected 'symbol frequency', got {raw.strip()!r}")
            sym = alphabet.fold(parts[0])
            if sym not in alphabet:
                raise ValueError(f"{path}:{lineno}: symbol {parts[0]!r} is not in the alphabet")
            try:
                table[sym] = float(parts[1])
            except ValueError:
                raise ValueError(f"{path}:{lineno}: bad frequency {parts[1]!r}") from None
    missing = [sym for sym in alphabet if sym not in table]
    if missing:
        raise ValueError(f"{path}: no frequency for {''.join(missing)!r}")
    name = os.path.splitext(os.path.basename(path))[0]
    return LanguageProfile(name, alphabet, [table[sym] for sym in alphabet])

# ---------- Frequency profiling ----------
@dataclass
class FrequencyEntry:
    symbol: str
    count: int = 0
    percent: float = 0.0

def count_frequencies(symbols: Iterable[str], table: Dict[str, int]) -> int:
    """Increment ``table`` for every symbol it already holds; returns how many were counted."""
    counted = 0
    for ch in symbols:
        if ch in table:
            table[ch] += 1
            counted += 1
    return counted

class FrequencyTable:
    """Occurrence counts and percentages for every symbol of an alphabet, in alphabet order."""

    def __init__(self, alphabet: Alphabet, counts: Dict[str, int]):
        total = sum(counts.get(sym, 0) for sym in alphabet)
        if total == 0:
            raise CrackInputError("no symbols of the alphabet to count; frequencies are undefined")
        self.alphabet = alphabet
        self.total = total
        self.entries: List[FrequencyEntry] = [
            FrequencyEntry(sym, counts.get(sym, 0), counts.get(sym, 0) / total * 100) for sym in alphabet
        ]

    def count(self, ch: str) -> int:
        return self.entries[self.alphabet.residue(ch)].count

    def fractions(self) -> List[float]:
        return [e.count / self.total for e in self.entries]

    def ranked(self) -> List[FrequencyEntry]:
        # sorted() is stable: equal counts stay in alphabet order
        return sorted(self.entries, key=lambda e: e.count, reverse=True)

    def ranked_symbols(self) -> str:
        return "".join(e.symbol for e in self.ranked())

def build_frequency_table(text: str, alphabet: Alphabet = ENGLISH_ALPHABET) -> FrequencyTable:
    table = {sym: 0 for sym in alphabet}
    count_frequencies(alphabet.fold(text), table)
    return FrequencyTable(alphabet, table)

# ---------- Cipher primitives ----------
class AffineCipher:
    """x -> (alpha*x + beta) mod n. Symbols outside the alphabet are copied as-is."""

    def __init__(self, alpha: int, beta: int, alphabet: Alphabet = ENGLISH_ALPHABET):
        n = len(alphabet)
        inv = _inv_mod(alpha, n)
        if inv is None:
            raise InvalidKeyError(f"a={alpha} is not coprime with the alphabet size {n}")
        self.alphabet = alphabet
        self.alpha = alpha % n
        self.beta = beta % n
        self._inv = inv

    def _map(self, text: str, fn: Callable[[int], int]) -> str:
        out = []
        for ch in self.alphabet.fold(text):
            if ch in self.alphabet:
                out.append(self.alphabet.symbol(fn(self.alphabet.residue(ch))))
            else:
                out.append(ch)
        return "".join(out)

    def encrypt(self, text: str) -> str:
        return self._map(text, lambda x: self.alpha * x + self.beta)

    def decrypt(self, text: str) -> str:
        return self._map(text, lambda y: self._inv * (y - self.beta))

class VigenereCipher:
    """Shift the i-th alphabet symbol of the text by the i-th key symbol, key repeating."""

    def __init__(self, key: str, alphabet: Alphabet = ENGLISH_ALPHABET):
        key = alphabet.fold(key)
        if not key:
            raise InvalidKeyError("Vigenere key must not be empty")
        bad = "".join(ch for ch in key if ch not in alphabet)
        if bad:
            raise InvalidKeyError(f"Vigenere key has symbols outside the alphabet: {bad!r}")
        self.alphabet = alphabet
        self.key = key
        self.shifts = [alphabet.residue(ch) for ch in key]

    def _shift(self, text: str, sign: int) -> str:
        out = []; j = 0
        for ch in self.alphabet.fold(text):
            if ch in self.alphabet:
                k = self.shifts[j % len(self.shifts)]
                out.append(self.alphabet.symbol(self.alphabet.residue(ch) + sign * k))
                j += 1
            else:
                out.append(ch)
        return "".join(out)

    def encrypt(self, text: str) -> str:
        return self._shift(text, 1)

    def decrypt(self, text: str) -> str:
        return self._shift(text, -1)

# ---------- Affine cryptanalysis ----------
SCORE_CONTRADICTED = -1
SCORE_NO_MATCH = 0
SCORE_ONE_MATCH = 1
SCORE_CONFIDENT = 2

class KnownPair(NamedTuple):
    plain: str
    cipher: str

@dataclass
class AffineSolution:
    alpha: int
    beta: int
    plaintext: str
    score: int

    @property
    def confident(self) -> bool:
        return self.score >= SCORE_CONFIDENT

def _check_known(known: Iterable[Tuple[str, str]], alphabet: Alphabet) -> List[KnownPair]:
    pairs: List[KnownPair] = []
    for plain, cipher in known:
        plain, cipher = alphabet.fold(plain), alphabet.fold(cipher)
        if plain not in alphabet or cipher not in alphabet:
            raise CrackInputError(f"known pair {plain!r} -> {cipher!r} uses symbols outside the alphabet")
        pairs.append(KnownPair(plain, cipher))
    return pairs

def _check_ciphertext(ciphertext: str, alphabet: Alphabet) -> str:
    ciphertext = alphabet.fold(ciphertext)
    if not alphabet.filter(ciphertext):
        raise CrackInputError("ciphertext has no symbols from the alphabet")
    return ciphertext

def score_candidate(alpha: int, beta: int, ciphertext: str, known: Sequence[KnownPair],
                    alphabet: Alphabet = ENGLISH_ALPHABET) -> Tuple[int, str]:
    """Decrypt with (alpha, beta) and check the known pairs against the result.

    For each pair the first occurrence of its plain symbol in the decryption is
    located; the ciphertext must hold the pair's cipher symbol at that index or
    the key is contradicted. Pairs whose plain symbol never appears are skipped.
    """
    ciphertext = alphabet.fold(ciphertext)
    plaintext = AffineCipher(alpha, beta, alphabet).decrypt(ciphertext)
    matches = SCORE_NO_MATCH
    for pair in known:
        idx = plaintext.find(pair.plain)
        if idx == -1:
            continue
        if ciphertext[idx] != pair.cipher:
            return SCORE_CONTRADICTED, plaintext
        matches += 1
        if matches == SCORE_CONFIDENT:
            break
    return matches, plaintext

def solve_affine_key(p1: Tuple[int, int], p2: Tuple[int, int], n: int) -> Optional[Tuple[int, int]]:
    """Solve y = alpha*x + beta (mod n) through two (x, y) residue pairs."""
    (x1, y1), (x2, y2) = p1, p2
    inv = _inv_mod(x2 - x1, n)
    if inv is None:
        return None
    alpha = ((y2 - y1) * inv) % n
    beta = (y1 - x1 * alpha) % n
    if math.gcd(alpha, n) != 1:
        return None
    return alpha, beta

class _AffineSearch:
    """Verified candidates for one ciphertext line.

    Each (alpha, beta) is scored at most once; ``done`` is set by the first
    confident candidate and every search loop checks it before continuing.
    """

    def __init__(self, ciphertext: str, known: Sequence[KnownPair], alphabet: Alphabet, debug: bool = False):
        self.ciphertext = ciphertext
        self.known = known
        self.alphabet = alphabet
        self.debug = debug
        self.seen: Set[Tuple[int, int]] = set()
        self.results: List[AffineSolution] = []
        self.done = False

    def try_key(self, alpha: int, beta: int, source: str) -> None:
        if (alpha, beta) in self.seen:
            return
        self.seen.add((alpha, beta))
        score, plaintext = score_candidate(alpha, beta, self.ciphertext, self.known, self.alphabet)
        if self.debug:
            eprint(cCYN(f"[{source}] a={alpha} b={beta} score={score}"))
        if score == SCORE_CONTRADICTED:
            return
        self.results.append(AffineSolution(alpha, beta, plaintext, score))
        if score >= SCORE_CONFIDENT:
            self.done = True

    def try_solve(self, p1: Tuple[int, int], p2: Tuple[int, int], source: str) -> None:
        key = solve_affine_key(p1, p2, len(self.alphabet))
        if key is not None:
            self.try_key(key[0], key[1], source)

def brute_force_crack(ciphertext: str, known: Iterable[Tuple[str, str]] = (),
                      alphabet: Alphabet = ENGLISH_ALPHABET, debug: bool = False) -> List[AffineSolution]:
    """Try every valid (alpha, beta), alpha ascending then beta ascending.

    Every candidate not contradicted by ``known`` is returned; the search
    stops after the first candidate matching two known pairs.
    """
    search = _AffineSearch(_check_ciphertext(ciphertext, alphabet), _check_known(known, alphabet), alphabet, debug)
    n = len(alphabet)
    keys = ((a, b) for a in range(1, n) if math.gcd(a, n) == 1 for b in range(n))
    for alpha, beta in keys:
        search.try_key(alpha, beta, "brute")
        if search.done:
            break
    return search.results

def known_driven_crack(ciphertext: str, rest: str = "", known: Iterable[Tuple[str, str]] = (),
                       profile: LanguageProfile = ENGLISH, debug: bool = False) -> List[AffineSolution]:
    """Solve for (alpha, beta) from pairs of plain -> cipher hypotheses.

    Hypotheses come first from the known pairs alone, then from one known
    pair and one frequency guess, then from two frequency guesses. A
    frequency guess maps the i-th most frequent symbol of ``profile`` to the
    i-th most frequent symbol of ``ciphertext`` plus ``rest``.
    """
    alphabet = profile.alphabet
    n = len(alphabet)
    pairs = _check_known(known, alphabet)
    search = _AffineSearch(_check_ciphertext(ciphertext, alphabet), pairs, alphabet, debug)
    residues = [(alphabet.residue(p.plain), alphabet.residue(p.cipher)) for p in pairs]

    for i, j in itertools.combinations(range(len(residues)), 2):
        if search.done:
            break
        search.try_solve(residues[i], residues[j], "known")

    if search.done:
        return search.results

    ranked = build_frequency_table(search.ciphertext + rest, alphabet).ranked_symbols()
    guesses = [(alphabet.residue(p), alphabet.residue(c)) for p, c in zip(profile.ranking, ranked)]
    if debug:
        eprint(cBLU(f"ciphertext ranking: {ranked}"))

    for i, k in itertools.product(range(n), range(len(pairs))):
        if search.done:
            break
        if profile.ranking[i] == pairs[k].plain or ranked[i] == pairs[k].cipher:
            continue
        search.try_solve(residues[k], guesses[i], "known+freq")

    for i, j in itertools.combinations(range(n), 2):
        if search.done:
            break
        search.try_solve(guesses[i], guesses[j], "freq")
    return search.results

# ---------- Vigenere cryptanalysis ----------
SAMPLE_LIMIT = 2000

@dataclass
class VigenereKeyGuess:
    length: int
    key: str

def sample_ciphertext(lines: Iterable[str], alphabet: Alphabet = ENGLISH_ALPHABET, limit: int = SAMPLE_LIMIT) -> str:
    """Join the alphabet symbols of ``lines`` up to ``limit`` symbols."""
    parts: List[str] = []
    size = 0
    for line in lines:
        if size >= limit:
            break
        kept = alphabet.filter(line)
        parts.append(kept)
        size += len(kept)
    return "".join(parts)[:limit]

def _check_sample(text: str, max_key_length: int) -> None:
    if not text:
        raise CrackInputError("no ciphertext symbols to analyse")
    if max_key_length < 1:
        raise CrackInputError(f"maximum key length must be at least 1, got {max_key_length}")

def coincidence_counts(text: str, max_key_length: int) -> List[int]:
    """Entry L-1 counts the positions i with text[i] == text[i+L]."""
    return [sum(1 for a, b in zip(text, text[length:]) if a == b) for length in range(1, max_key_length + 1)]

def guess_key_lengths(text: str, max_key_length: int) -> List[int]:
    """Every length in [1, max_key_length] reaching the highest coincidence count, ascending."""
    _check_sample(text, max_key_length)
    counts = coincidence_counts(text, min(max_key_length, len(text)))
    best = max(counts)
    return [length for length, c in enumerate(counts, start=1) if c == best]

def column_shift(column: str, profile: LanguageProfile = ENGLISH) -> int:
    """Caesar shift whose rotation of ``profile`` correlates best with ``column``."""
    freqs = build_frequency_table(column, profile.alphabet).fractions()
    n = len(profile.alphabet)
    best_shift, best_score = 0, None
    for shift in range(n):
        score = sum(profile.frequencies[(j - shift) % n] * freqs[j] for j in range(n))
        if best_score is None or score > best_score:
            best_shift, best_score = shift, score
    return best_shift

def recover_key(text: str, length: int, profile: LanguageProfile = ENGLISH) -> str:
    if length < 1:
        raise CrackInputError(f"key length must be at least 1, got {length}")
    text = profile.alphabet.filter(text)
    return "".join(profile.alphabet.symbol(column_shift(text[start::length], profile)) for start in range(length))

def crack_key(text: str, max_key_length: int, profile: LanguageProfile = ENGLISH, debug: bool = False) -> List[VigenereKeyGuess]:
    sample = profile.alphabet.filter(text)
    lengths = guess_key_lengths(sample, max_key_length)
    if debug:
        counts = coincidence_counts(sample, min(max_key_length, len(sample)))
        eprint(cBLU("coincidences: " + " ".join(f"{L}:{c}" for L, c in enumerate(counts, start=1))))
    guesses = []
    for length in lengths:
        key = recover_key(sample, length, profile)
        if debug:
            eprint(cCYN(f"[vigenere] length={length} key={key}"))
        guesses.append(VigenereKeyGuess(length, key))
    return guesses

# ---------- Helpers ----------
def is_file(p: str) -> bool:
    try:
        return os.path.isfile(p)
    except (TypeError, ValueError):
        return False

def read_value_or_file(v: Optional[str]) -> Optional[str]:
    if v is None: return None
    if is_file(v):
        with open(v, "rb") as f:
            return f.read().decode("utf-8", errors="ignore")
    return v

class Report:
    """Output lines: colored on the terminal, or plain text into ``path``."""

    def __init__(self, path: Optional[str] = None):
        self.path = path
        self.lines: List[str] = []

    def add(self, line: str, paint: Optional[Callable[[str], str]] = None):
        self.lines.append(line)
        if self.path is None:
            print(paint(line) if paint else line)

    def write(self):
        if self.path is None:
            return
        with open(self.path, "w", encoding="utf-8") as f:
            for line in self.lines:
                f.write(line + "\n")

def _alphabet_and_profile(args) -> Tuple[Alphabet, Optional[LanguageProfile]]:
    alphabet = Alphabet(args.alphabet) if args.alphabet else ENGLISH_ALPHABET
    if args.profile:
        return alphabet, load_profile(args.profile, alphabet)
    if alphabet == ENGLISH_ALPHABET:
        return alphabet, ENGLISH
    return alphabet, None

def _require_profile(profile: Optional[LanguageProfile]) -> LanguageProfile:
    if profile is None:
        raise CrackInputError("no reference frequencies for this alphabet; pass --profile")
    return profile

def _read_input(args) -> str:
    text = read_value_or_file(args.input)
    if text is None:
        raise CrackInputError("no input text")
    return text

# ---------- Commands ----------
def _print_solutions(report: Report, ciph: str, solutions: Sequence[AffineSolution]):
    report.add("Possible translations for first line of text", cCYN)
    report.add(f"{'a':>3}{'b':>3} | {ciph}")
    report.add("-" * 7 + "|" + "-" * (len(ciph) + 1))
    for s in solutions:
        report.add(f"{s.alpha:>3}{s.beta:>3} | {s.plaintext}", cGRN if s.confident else None)
    if not solutions:
        report.add("No key is consistent with the known pairs.", cYEL)

def run_affine(args) -> int:
    alphabet, profile = _alphabet_and_profile(args)
    text = _read_input(args)
    report = Report(args.output)
    if args.mode in ("encrypt", "decrypt"):
        if args.a is None or args.b is None:
            raise InvalidKeyError("encryption and decryption need both -a and -b")
        cipher = AffineCipher(args.a, args.b, alphabet)
        out = cipher.encrypt(text) if args.mode == "encrypt" else cipher.decrypt(text)
        for line in out.splitlines():
            report.add(line)
    else:
        lines = text.splitlines() or [""]
        ciph = alphabet.fold(lines[0])
        known = args.known or []
        if args.mode == "crack-all":
            solutions = brute_force_crack(ciph, known, alphabet, debug=args.debug)
        else:
            rest = "\n".join(lines[1:])
            solutions = known_driven_crack(ciph, rest, known, _require_profile(profile), debug=args.debug)
        _print_solutions(report, ciph, solutions)
    report.write()
    return 0

def run_vigenere(args) -> int:
    alphabet, profile = _alphabet_and_profile(args)
    text = _read_input(args)
    report = Report(args.output)
    if args.crack is not None:
        profile = _require_profile(profile)
        lines = text.splitlines()
        guesses = crack_key(sample_ciphertext(lines, alphabet), args.crack, profile, debug=args.debug)
        first = lines[0] if lines else ""
        for g in guesses:
            report.add(f"Potential key (length {g.length}): {g.key}", cGRN)
            report.add(f"    {VigenereCipher(g.key, alphabet).decrypt(first)}", cBLU)
    else:
        if not args.key:
            raise InvalidKeyError("encryption and decryption need a key (-k)")
        cipher = VigenereCipher(args.key, alphabet)
        out = cipher.encrypt(text) if args.mode == "encrypt" else cipher.decrypt(text)
        for line in out.splitlines():
            report.add(line)
    report.write()
    return 0

def run_freq(args) -> int:
    report = Report(args.output)
    texts = []
    for name in args.files:
        try:
            with open(name, "r", encoding="utf-8", errors="replace") as f:
                texts.append(f.read())
        except OSError:
            eprint(cYEL(f"Unable to process {name}"))
            continue
        report.add(f"Processing {name}...")
    text = "".join(texts)
    if args.letters:
        alphabet, _ = _alphabet_and_profile(args)
    elif text:
        alphabet = Alphabet("".join(sorted(set(text))))
    else:
        raise CrackInputError("nothing to count")
    table = build_frequency_table(text, alphabet)

    rule = "-" * 50
    report.add(""); report.add(rule)
    report.add(f"{table.total} total characters read", cCYN)
    report.add(rule); report.add("")
    for e in table.ranked():
        if not e.count:
            continue
        shown = e.symbol if e.symbol.isprintable() and not e.symbol.isspace() else " "
        report.add(f"\t {shown}  ({ord(e.symbol):4})\t{e.count:10}\t{e.percent:.6g}%")
    report.write()
    return 0

# ---------- Main ----------
def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="classicxploit",
        description="classicxploit: affine and Vigenere ciphers with key recovery",
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--alphabet", help="Ordered symbols to work on (default: a-z)")
    common.add_argument("--profile", help="Reference frequencies file: one 'symbol frequency' per line")
    common.add_argument("-o", "--output", help="Write results to this file instead of the terminal")
    common.add_argument("--debug", action="store_true", help="Show every candidate key being checked")
    sub = ap.add_subparsers(dest="command", required=True)

    aff = sub.add_parser("affine", parents=[common], help="Affine cipher: c = a*m + b (mod n)")
    aff.add_argument("-i", "--input", required=True, help="Text (raw string or path to file)")
    mode = aff.add_mutually_exclusive_group(required=True)
    mode.add_argument("-e", "--encrypt", dest="mode", action="store_const", const="encrypt", help="Encrypt with -a/-b")
    mode.add_argument("-d", "--decrypt", dest="mode", action="store_const", const="decrypt", help="Decrypt with -a/-b")
    mode.add_argument("--crack-all", dest="mode", action="store_const", const="crack-all",
                      help="Crack the first line by testing every a, b")
    mode.add_argument("--crack-best", dest="mode", action="store_const", const="crack-best",
                      help="Crack the first line by solving linear systems from known pairs and frequencies")
    aff.add_argument("-a", type=int, help="Multiplier, coprime with the alphabet size")
    aff.add_argument("-b", type=int, help="Offset")
    aff.add_argument("-k", "--known", nargs=2, action="append", metavar=("PLAIN", "CIPHER"),
                     help="Hint: PLAIN encrypts to CIPHER (repeatable)")
    aff.set_defaults(func=run_affine)

    vig = sub.add_parser("vigenere", parents=[common], help="Vigenere cipher")
    vig.add_argument("-i", "--input", required=True, help="Text (raw string or path to file)")
    mode = vig.add_mutually_exclusive_group(required=True)
    mode.add_argument("-e", "--encrypt", dest="mode", action="store_const", const="encrypt", help="Encrypt with -k")
    mode.add_argument("-d", "--decrypt", dest="mode", action="store_const", const="decrypt", help="Decrypt with -k")
    mode.add_argument("-c", "--crack", type=int, metavar="N", help="Recover the key, trying lengths up to N")
    vig.add_argument("-k", "--key", help="Key made of alphabet symbols")
    vig.set_defaults(func=run_vigenere)

    frq = sub.add_parser("freq", parents=[common], help="Character frequencies of one or more files")
    frq.add_argument("files", nargs="+", help="Files to count")
    frq.add_argument("--letters", action="store_true", help="Count only alphabet symbols, case-folded")
    frq.set_defaults(func=run_freq)
    return ap

def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted."); return 130
    except InvalidKeyError as e:
        print(cYEL(f"Invalid key: {e}")); return 3
    except CrackInputError as e:
        print(cYEL(str(e))); return 1
    except OSError as e:
        print(cYEL(f"Unable to open {e.filename}: {e.strerror}")); return 2
    except ValueError as e:
        print(cYEL(str(e))); return 1

if __name__ == "__main__":
    sys.exit(main())
