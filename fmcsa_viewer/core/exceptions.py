

class ViewerError(Exception):
    """Base exception for all fmcsa_viewer errors"""
    pass

class ConfigError(ViewerError):
    """Invalid or inconsistent global.json"""
    pass

class RecordLoadError(ViewerError):
    """
    The record provider could not fetch or parse the dataset
    (missing file, unreachable URL, unsupported format)
    """
    pass
