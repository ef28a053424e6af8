from .writer import random_filename, serialize, write_result

__all__ = ['random_filename', 'serialize', 'write_result']
