"""Unit payloads in the camelCase shape the authoring tool stores."""

from __future__ import annotations


def quiz_data(n: int = 3) -> dict:
    return {
        "items": [
            {"question": f"{i}+{i}?", "options": [str(i * 2), str(i * 2 + 1), str(i * 2 + 2)], "correctAnswer": str(i * 2)}
            for i in range(1, n + 1)
        ]
    }


def matching_data(n: int = 3) -> dict:
    return {"pairs": [{"id": f"p{i}", "itemA": f"word {i}", "itemB": f"meaning {i}"} for i in range(n)]}


def true_false_data() -> dict:
    return {
        "items": [
            {"statement": "Water is wet.", "isTrue": True},
            {"statement": "Fire is cold.", "isTrue": False, "correction": "Fire is hot."},
        ]
    }


def flashcard_data(n: int = 2) -> dict:
    return {"items": [{"front": f"front {i}", "back": f"back {i}"} for i in range(n)]}


def sequence_data() -> dict:
    return {
        "question": "Order them",
        "items": [
            {"id": "c", "text": "third", "order": 2},
            {"id": "a", "text": "first", "order": 0},
            {"id": "b", "text": "second", "order": 1},
        ],
    }


def cloze_data() -> dict:
    return {"data": {"textParts": ["The sky is ", " and grass is ", "."], "answers": ["blue", "green"]}}


def scramble_data() -> dict:
    return {"items": [{"word": "tiger", "hint": "Striped cat"}, {"word": "zebra"}]}
