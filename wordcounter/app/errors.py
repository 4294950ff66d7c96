class WordCounterError(Exception):
    """Base de los errores que la capa HTTP sabe traducir."""

class InvalidInput(WordCounterError):
    pass

class NotFound(WordCounterError):
    pass

class ProcessingFailure(WordCounterError):
    pass
