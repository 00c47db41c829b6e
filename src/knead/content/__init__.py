"""Content layer — pages, frontmatter, Markdown, links and tables of contents."""
