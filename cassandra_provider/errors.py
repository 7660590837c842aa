# -*- coding: utf-8 -*-


class CassandraProviderError(Exception):
    pass


class ConfigurationError(CassandraProviderError):
    pass


class ValidationError(ConfigurationError):
    """Raised with every problem found in a set of attributes."""

    def __init__(self, messages):
        if isinstance(messages, str):
            messages = [messages]
        self.messages = list(messages)
        super(ValidationError, self).__init__('; '.join(self.messages))


class NotFoundError(CassandraProviderError):
    pass
