from mvntree.core.builder import build_dependency_tree, parse
from mvntree.core.model import DependencyNode, node_id
from mvntree.core.search import SearchResult, format_path, search_dependencies
