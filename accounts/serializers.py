from rest_framework import serializers
from django.contrib.auth.models import User
from .models import Profile
from .roles import is_privileged

class NicknameSerializer(serializers.ModelSerializer):
    """The only profile attribute an actor may change about themselves."""
    class Meta:
        model = Profile
        fields = ["nickname"]

class ActorSerializer(serializers.ModelSerializer):
    """Current actor as the article admin sees it: identity plus role."""
    nickname = serializers.CharField(source="profile.nickname", read_only=True)
    role = serializers.IntegerField(source="profile.role", read_only=True)
    privileged = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ["id", "username", "email", "nickname", "role", "privileged"]

    def get_privileged(self, obj):
        return is_privileged(obj)
