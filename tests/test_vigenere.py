#!/usr/bin/env python3
"""
Test the Vigenere cipher, key length estimation and key recovery
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from classicxploit import (
    ENGLISH_ALPHABET, ENGLISH, VigenereCipher, VigenereKeyGuess,
    InvalidKeyError, CrackInputError, sample_ciphertext, coincidence_counts,
    guess_key_lengths, column_shift, recover_key, crack_key,
)

def profile_plaintext(repeat):
    """Letters in alphabet order, counts following the English profile, each letter written `repeat` times.

    Every key column then sees the whole profile-shaped text, and equal
    ciphertext symbols only line up at multiples of the key length as long as
    no two key symbols are within 2 of each other.
    """
    counts = [max(1, round(f * 130)) for f in ENGLISH.frequencies]
    text = "".join(sym * c for sym, c in zip(ENGLISH_ALPHABET, counts))
    return "".join(ch * repeat for ch in text)

def test_vigenere_cipher():
    """Test encryption, decryption and pass-through of other characters"""
    print("Testing Vigenere cipher...")

    cipher = VigenereCipher("KEY")
    assert cipher.encrypt("attack at dawn") == "kxrkgi kx bkal", "Key should only advance on letters"
    assert cipher.decrypt("kxrkgi kx bkal") == "attack at dawn"

    for bad in ("", "k3y"):
        try:
            VigenereCipher(bad)
        except InvalidKeyError:
            pass
        else:
            raise AssertionError(f"Expected InvalidKeyError for key {bad!r}")

    print("✅ Vigenere cipher tests passed")

def test_sample_ciphertext():
    """Test filtering and the sampling cap"""
    print("Testing ciphertext sampling...")

    assert sample_ciphertext(["Ab, c!", "D"]) == "abcd"
    assert sample_ciphertext(["Hello, World!", "abc"], limit=8) == "hellowor"
    assert len(sample_ciphertext(["abcdefghij"] * 500)) == 2000

    print("✅ Ciphertext sampling tests passed")

def test_coincidences():
    """Test self-coincidence counts and tie handling"""
    print("Testing coincidence counting...")

    assert coincidence_counts("abab", 3) == [0, 2, 0]
    assert guess_key_lengths("abab", 3) == [2]
    assert guess_key_lengths("abcd", 3) == [1, 2, 3], "Tied lengths should all be kept"
    assert guess_key_lengths("ab", 10) == [1, 2], "Lengths beyond the text are not considered"

    print("✅ Coincidence counting tests passed")

def test_column_shift():
    """Test the correlation against the reference profile"""
    print("Testing column shift...")

    assert column_shift("e" * 5) == 0
    assert column_shift("i" * 10) == 4, "A column of 'i' is 'e' shifted by 4"
    plain = profile_plaintext(1)
    shifted = VigenereCipher("q").encrypt(plain)
    assert column_shift(shifted) == ENGLISH_ALPHABET.residue("q")

    print("✅ Column shift tests passed")

def test_crack_key():
    """Test a 400-symbol sample encrypted with 'key'"""
    print("Testing Vigenere crack with key 'key'...")

    plaintext = profile_plaintext(3)
    assert len(plaintext) >= 400
    ciphertext = VigenereCipher("key").encrypt(plaintext)

    lengths = guess_key_lengths(ciphertext, 10)
    assert 3 in lengths, f"Expected 3 among the best lengths, got {lengths}"
    assert recover_key(ciphertext, 3) == "key"

    guesses = crack_key(ciphertext, 10, ENGLISH)
    assert VigenereKeyGuess(3, "key") in guesses, f"Unexpected guesses {guesses}"
    assert [g.length for g in guesses] == sorted(g.length for g in guesses)
    assert guesses == crack_key(ciphertext, 10, ENGLISH), "Crack should be deterministic"

    print("✅ Vigenere crack ('key') tests passed")

def test_crack_longer_key():
    """Test a five-symbol key over a sample longer than 20 times its length"""
    print("Testing Vigenere crack with key 'world'...")

    plaintext = profile_plaintext(5)
    ciphertext = VigenereCipher("world").encrypt(plaintext)
    assert len(ciphertext) >= 20 * 5

    assert 5 in guess_key_lengths(ciphertext, 10)
    assert recover_key(ciphertext, 5) == "world"
    sample = sample_ciphertext(ciphertext.splitlines())
    assert VigenereKeyGuess(5, "world") in crack_key(sample, 10)

    print("✅ Vigenere crack ('world') tests passed")

def test_degenerate_input():
    """Test that unusable input is reported"""
    print("Testing degenerate Vigenere input...")

    for text, max_len in (("", 5), ("1234", 3), ("abc", 0)):
        try:
            crack_key(text, max_len)
        except CrackInputError:
            pass
        else:
            raise AssertionError(f"Expected CrackInputError for {text!r}, {max_len}")

    for length in (0, -2):
        try:
            recover_key("abc", length)
        except CrackInputError:
            pass
        else:
            raise AssertionError(f"Expected CrackInputError for key length {length}")

    print("✅ Degenerate Vigenere input tests passed")

def run_all_tests():
    """Run all Vigenere tests"""
    print("🧪 Running Vigenere tests...")
    print("=" * 50)

    try:
        test_vigenere_cipher()
        test_sample_ciphertext()
        test_coincidences()
        test_column_shift()
        test_crack_key()
        test_crack_longer_key()
        test_degenerate_input()

        print("=" * 50)
        print("🎉 All Vigenere tests passed!")
        return True

    except AssertionError as e:
        print(f"❌ Test failed: {e}")
        return False
    except Exception as e:
        print(f"❌ Unexpected error: {e}")
        return False

if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
