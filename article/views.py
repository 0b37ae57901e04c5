from django.db.models import Q
from rest_framework import viewsets, permissions, filters
from accounts.roles import is_privileged
from .models import Article
from .scoping import enforce_author, restrict_to_author, with_comment_count
from .serializers import ArticleSerializer

class ArticleViewSet(viewsets.ModelViewSet):
    def get_queryset(self):
        queryset = with_comment_count(Article.objects.select_related("author"))
        user = self.request.user

        if self.request.method in permissions.SAFE_METHODS:
            if not user.is_authenticated:
                return queryset.filter(active=True).order_by("-created_at")
            if not is_privileged(user):
                # published articles plus the actor's own drafts
                return queryset.filter(Q(active=True) | Q(author_id=user.pk)).order_by("-created_at")
            return queryset.order_by("-created_at")

        return restrict_to_author(queryset, user).order_by("-created_at")

    def perform_create(self, serializer):
        serializer.save(author=self._author_for(serializer))

    def perform_update(self, serializer):
        serializer.save(author=self._author_for(serializer))

    def _author_for(self, serializer):
        article = serializer.instance or Article()
        if "author" in serializer.validated_data:
            article.author = serializer.validated_data["author"]
        elif article.pk is None:
            article.author = self.request.user
        return enforce_author(self.request.user, article).author

    queryset = Article.objects.all()
    serializer_class = ArticleSerializer
    permission_classes = [permissions.IsAuthenticatedOrReadOnly]

    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ["id", "title"]  # /articles/?search=django
    ordering_fields = ["created_at", "title", "rating", "id"]  # /articles/?ordering=-rating
    ordering = ["-created_at"]
