"""Core schema compiler: lexer, parser, IR and resolution."""
