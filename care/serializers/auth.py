from rest_framework import serializers


class RegisterSerializer(serializers.Serializer):
    email = serializers.CharField(max_length=254, required=False, allow_blank=True)
    password = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)
    firstName = serializers.CharField(max_length=150, required=False, allow_blank=True, allow_null=True)
    lastName = serializers.CharField(max_length=150, required=False, allow_blank=True, allow_null=True)
    role = serializers.CharField(max_length=32, required=False, allow_blank=True, allow_null=True)

    def validate(self, attrs):
        if not attrs.get('email') or not attrs.get('password'):
            raise serializers.ValidationError('Email and password required')
        return attrs


class LoginSerializer(serializers.Serializer):
    email = serializers.CharField(required=False, allow_blank=True)
    password = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)
