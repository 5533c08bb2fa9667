"""soctop interactive application and command-line tools."""
