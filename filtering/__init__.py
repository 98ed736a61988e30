from filtering.keywords import KeywordRules, is_relevant, relevance_score

__all__ = ["KeywordRules", "is_relevant", "relevance_score"]
