# Note: absolute import from "ugcache"; PyInstaller binaries do not work without this.
from ugcache.cli import main

main()
