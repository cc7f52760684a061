class FindImportsError(Exception):
    # base exception for all application-specific errors.
    pass

class ConfigError(FindImportsError):
    # errors related to configuration.
    pass

class ParseError(FindImportsError):
    # source text could not be turned into a program tree.
    pass

class TemplateError(FindImportsError):
    # errors building desired statements from template code.
    pass

class OutputError(FindImportsError):
    # errors during rendering or output operations.
    pass

class ResolutionError(FindImportsError):
    # a desired statement is malformed and cannot be resolved.
    pass

class InvalidRequireError(ResolutionError):
    # a require-style declarator whose initializer is not a require call.
    pass

class UnsupportedStatementError(ResolutionError):
    # a desired statement that is neither an import nor a variable declaration.
    pass
