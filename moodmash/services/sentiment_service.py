# sentiment service — keyword sentiment heuristic and placeholder summaries
# used by the one-shot journal enrichment step; no model behind it

import re
from typing import Any, Dict

from moodmash.insights.lexicon import (
    SENTIMENT_LEXICON,
    SUMMARY_TEMPLATE,
    SentimentLexicon,
    SummaryTemplate,
)

_SENTENCE_END = re.compile(r"[.!?]")


def label_for_score(score: float, threshold: float = SENTIMENT_LEXICON.threshold) -> str:
    """map a score in [-1, 1] to its label band"""
    if score > threshold:
        return "positive"
    if score < -threshold:
        return "negative"
    return "neutral"


def analyze_sentiment(content: str, lexicon: SentimentLexicon = SENTIMENT_LEXICON) -> Dict[str, Any]:
    """score text by counting whitespace tokens that contain a positive or a
    negative keyword. a token can count toward both sides.
    returns dict with sentiment_score and sentiment_label."""
    positive = 0
    negative = 0
    for word in content.lower().split():
        if any(keyword in word for keyword in lexicon.positive):
            positive += 1
        if any(keyword in word for keyword in lexicon.negative):
            negative += 1

    total = (positive + negative) or 1
    score = max(-1.0, min(1.0, (positive - negative) / total))
    return {
        "sentiment_score": score,
        "sentiment_label": label_for_score(score, lexicon.threshold),
    }


def generate_summary(content: str, template: SummaryTemplate = SUMMARY_TEMPLATE) -> Dict[str, Any]:
    """first sentence of the entry plus fixed reflection prompts"""
    first_sentence = _SENTENCE_END.split(content)[0] or content[:100]
    return {
        "summary": f"{template.prefix}{first_sentence}...",
        "suggestions": list(template.suggestions),
    }


def build_enrichment(content: str) -> Dict[str, Any]:
    """fields written onto a journal entry by the enrichment step"""
    sentiment = analyze_sentiment(content)
    summary = generate_summary(content)
    return {
        "sentiment_score": sentiment["sentiment_score"],
        "sentiment_label": sentiment["sentiment_label"],
        "is_ai_generated": True,
        "ai_summary": summary["summary"],
        "ai_suggestions": summary["suggestions"],
    }
