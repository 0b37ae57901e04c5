from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import permissions
from .serializers import ActorSerializer, NicknameSerializer
from .models import Profile


class ProfileView(APIView):
    """Current actor and role, as seen by the article admin."""
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        profile, _ = Profile.objects.get_or_create(user=request.user)
        return Response(ActorSerializer(profile.user).data)

    def patch(self, request):
        # role is assigned by admins in the User admin, never self-served
        profile, _ = Profile.objects.get_or_create(user=request.user)
        serializer = NicknameSerializer(profile, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(ActorSerializer(profile.user).data)
