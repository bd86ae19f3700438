"""Structured natural-language input records.

An utterance is decomposed by an upstream classifier into (word, class) pairs; this package turns those
pairs into a `StructuredInput` and stores its slot lists as relational array literals.
"""
