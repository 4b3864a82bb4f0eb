"""Human-readable instance names used to tell probe replicas apart."""

from __future__ import annotations

import secrets

_ADJECTIVES: tuple[str, ...] = (
    "able", "amused", "bold", "brave", "bright", "calm", "careful", "charmed",
    "clever", "cool", "crisp", "daring", "eager", "fair", "fancy", "fast",
    "fine", "fleet", "fond", "free", "fresh", "gentle", "glad", "golden",
    "good", "grand", "happy", "hardy", "honest", "humble", "jolly", "keen",
    "kind", "lucky", "merry", "mighty", "modest", "neat", "nice", "noble",
    "patient", "polite", "proud", "quick", "quiet", "rapid", "ready", "regal",
    "robust", "sharp", "shy", "smart", "smooth", "solid", "steady", "still",
    "sunny", "sure", "swift", "tender", "tidy", "true", "vivid", "warm",
    "wise", "witty", "young", "zesty",
)

_NOUNS: tuple[str, ...] = (
    "badger", "bat", "bear", "beaver", "bison", "bobcat", "buck", "camel",
    "cat", "cobra", "condor", "crane", "crow", "deer", "dingo", "dodo",
    "dog", "dove", "drake", "eagle", "eel", "elk", "emu", "falcon", "ferret",
    "finch", "fox", "frog", "gecko", "goat", "goose", "gull", "hare", "hawk",
    "heron", "horse", "hound", "ibex", "jackal", "jay", "koala", "lark",
    "lemur", "lion", "llama", "lynx", "magpie", "marten", "mink", "mole",
    "moose", "mouse", "mule", "newt", "orca", "otter", "owl", "panda",
    "panther", "pigeon", "pony", "puma", "quail", "rabbit", "raven", "robin",
    "salmon", "seal", "shark", "sloth", "snail", "sparrow", "stork", "swan",
    "tiger", "toad", "trout", "turtle", "viper", "walrus", "weasel", "whale",
    "wolf", "wombat", "wren", "yak", "zebra",
)


def generate_identity(words: int = 2, separator: str = "-") -> str:
    """Return a random name such as ``brave-otter``.

    The last word is always an animal, preceded by ``words - 1`` adjectives.
    """

    if words < 1:
        raise ValueError("words must be >= 1")
    parts = [secrets.choice(_ADJECTIVES) for _ in range(words - 1)]
    parts.append(secrets.choice(_NOUNS))
    return separator.join(parts)


__all__ = ["generate_identity"]
