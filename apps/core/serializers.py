from rest_framework import serializers


class StoredFileSerializer(serializers.Serializer):
    """Metadata of a database-stored attachment; the content is never inlined."""
    id = serializers.IntegerField(read_only=True)
    file_name = serializers.CharField(read_only=True)
    content_type = serializers.CharField(read_only=True)
    file_size = serializers.IntegerField(read_only=True)
    description = serializers.CharField(read_only=True)
    created_at = serializers.DateTimeField(read_only=True)
    updated_at = serializers.DateTimeField(read_only=True)


class FileUploadSerializer(serializers.Serializer):
    file = serializers.FileField()
    description = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')
