import random
from collections import Counter

from wordle_service.models.game import LetterStatus
from wordle_service.services.game_engine import build_letter_status, evaluate_guess

C = LetterStatus.CORRECT
P = LetterStatus.PRESENT
A = LetterStatus.ABSENT


def test_exact_match_is_all_correct():
    assert evaluate_guess('CRANE', 'CRANE') == [C, C, C, C, C]


def test_no_shared_letters_is_all_absent():
    assert evaluate_guess('BUMPY', 'CRANE') == [A, A, A, A, A]


def test_duplicate_guess_letter_with_single_target_letter():
    # Target has one A; the exact match at position 2 consumes it
    assert evaluate_guess('HALLO', 'HELLO') == [C, A, C, C, C]


def test_reversed_word_keeps_exact_middle_match():
    assert evaluate_guess('OLLEH', 'HELLO') == [P, P, C, P, P]


def test_duplicate_letters_in_both_guess_and_target():
    assert evaluate_guess('ERASE', 'SPEED') == [P, A, A, P, P]


def test_present_is_assigned_left_to_right():
    # Only one E left after nothing matches exactly: the first E gets it
    assert evaluate_guess('EERIE', 'CREPT') == [P, A, P, A, A]


def test_correct_takes_priority_over_earlier_present():
    # The E at position 4 is exact, so the E at position 0 must not be PRESENT
    assert evaluate_guess('EXTRE', 'CRANE') == [A, A, A, P, C]


def test_correct_and_present_never_exceed_target_letter_count():
    rng = random.Random(1234)
    alphabet = 'ABCDE'  # small alphabet forces repeated letters
    for _ in range(2000):
        target = ''.join(rng.choice(alphabet) for _ in range(5))
        guess = ''.join(rng.choice(alphabet) for _ in range(5))
        feedback = evaluate_guess(guess, target)

        target_counts = Counter(target)
        marked = Counter(letter for letter, status in zip(guess, feedback) if status is not A)
        for letter, count in marked.items():
            assert count <= target_counts[letter], (guess, target, feedback)

        for i, status in enumerate(feedback):
            assert (status is C) == (guess[i] == target[i]), (guess, target, feedback)


def test_absent_letter_means_no_unclaimed_copy_remains():
    rng = random.Random(99)
    alphabet = 'ABC'
    for _ in range(500):
        target = ''.join(rng.choice(alphabet) for _ in range(5))
        guess = ''.join(rng.choice(alphabet) for _ in range(5))
        feedback = evaluate_guess(guess, target)
        marked = Counter(letter for letter, status in zip(guess, feedback) if status is not A)
        for letter, status in zip(guess, feedback):
            if status is A:
                assert marked[letter] == Counter(target)[letter], (guess, target, feedback)


def test_letter_status_only_upgrades():
    evaluations = [
        ('SLATE', evaluate_guess('SLATE', 'CRANE')),
        ('CRANE', evaluate_guess('CRANE', 'CRANE')),
        ('TRAIN', evaluate_guess('TRAIN', 'CRANE')),
    ]
    letter_status = build_letter_status(evaluations)

    assert letter_status['A'] == 'CORRECT'
    assert letter_status['E'] == 'CORRECT'
    # T was ABSENT in SLATE and TRAIN
    assert letter_status['T'] == 'ABSENT'
    assert letter_status['Z'] == 'UNUSED'
    assert len(letter_status) == 26
