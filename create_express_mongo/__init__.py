"""create-express-mongo -- scaffold Express + MongoDB projects in seconds.

Generates a JavaScript or TypeScript Express backend wired to MongoDB and,
for full-stack projects, a Vite frontend (React, Vue or Svelte) inside an npm
workspace.
"""

__version__ = "1.0.0"
