"""pageclip: chunking engine for clipped pages, transcripts and reader HTML."""
