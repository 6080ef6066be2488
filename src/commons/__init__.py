"""
Extendible commons package.

Subpackages:
  config  - ConfigProvider, YamlConfigProvider; add env/remote sources by implementing ConfigProvider
  io      - FileWriter; add other report destinations by implementing it
  folder  - FileEnumerator, enumerate_files (recursive, lazy, restartable)
  errors  - error taxonomy shared by enumeration, extraction and the runner
"""
