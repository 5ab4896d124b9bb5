from mvntree.__version__ import __version__
