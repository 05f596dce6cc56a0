class WebPdfError(Exception):
    pass


class ValidationError(WebPdfError):
    pass


class SelectorNotFoundError(WebPdfError):
    pass


class NavigationError(WebPdfError):
    pass


class ParsingError(WebPdfError):
    pass


class FileIOError(WebPdfError):
    pass


class FileReadError(FileIOError):
    pass


class WriteError(FileIOError):
    pass
